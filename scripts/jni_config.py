JNI_LENS_VERSION = "0.1.0-dev"

# Report format version: bump when report.json or the fact table schema changes.
REPORT_SCHEMA_VERSION = "v1"

# Symbol names fixed by the JNI naming convention.
JNI_SYMBOL_PREFIX = "Java_"
JNI_ONLOAD_NAME = "JNI_OnLoad"

# Comment marker used by analysts (and other tools) to opt a function out of matching.
IGNORE_MARKER = "JNIAnalyzer:IGNORE"

# Ghidra data type archive holding jni.h; types live under the header category.
JNI_ARCHIVE_NAME = "jni_all"
JNI_ARCHIVE_FILE = "jni_all.gdt"
JNI_ARCHIVE_MODULE = "JNIAnalyzer"
JNI_HEADER_CATEGORY = "/jni_all.h"

ENV_PARAM_NAME = "env"
RECEIVER_PARAM_NAME = "thiz"
ARG_PARAM_PREFIX = "a"
ONLOAD_PARAM_NAME = "vm"

ENV_TYPE = "JNIEnv *"
CLASS_REF_TYPE = "jclass"
OBJECT_REF_TYPE = "jobject"
VM_TYPE = "JavaVM *"
STATUS_TYPE = "jint"

TYPE_ERROR_POLICIES = ("abort", "skip")
DEFAULT_TYPE_ERROR_POLICY = "abort"

REPORT_FILENAME = "report.json"
ERROR_FILENAME = "apply_error.txt"
METHOD_FACTS_TABLE = "jni_methods"
