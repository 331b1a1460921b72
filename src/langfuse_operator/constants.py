"""Constants for the Langfuse Operator."""

# API Group
API_GROUP = "langfuse.operator.dev"
API_GROUP_VERSION = f"{API_GROUP}/v1alpha1"

# Resource Kinds
KIND_ORGANIZATION = "Organization"
KIND_ORGANIZATION_API_KEY = "OrganizationApiKey"
KIND_PROJECT = "Project"
KIND_PROJECT_API_KEY = "ProjectApiKey"

# Plurals
PLURAL_ORGANIZATIONS = "organizations"
PLURAL_ORGANIZATION_API_KEYS = "organizationapikeys"
PLURAL_PROJECTS = "projects"

# Labels
LABEL_MANAGED_BY = f"{API_GROUP}/managed-by"
LABEL_RESOURCE_TYPE = f"{API_GROUP}/resource-type"

# Finalizers
FINALIZER = f"{API_GROUP}/finalizer"

# Field Manager
FIELD_MANAGER = "langfuse-operator"
CONTROLLER_NAME = "langfuse-operator"

# Credentials secret layout
SECRET_SUFFIX = "-credentials"
SECRET_KEY_PUBLIC = "public-key"
SECRET_KEY_SECRET = "secret-key"

# Condition Types
COND_READY = "Ready"
COND_DEPENDENCY_NOT_READY = "DependencyNotReady"
COND_CREATION_FAILED = "CreationFailed"
COND_UPDATE_FAILED = "UpdateFailed"
COND_DRIFT_DETECTED = "DriftDetected"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_VALIDATE_SUCCEEDED = "ValidateSucceeded"
EVENT_REASON_VALIDATE_FAILED = "ValidateFailed"
EVENT_REASON_CREATED = "Created"
EVENT_REASON_UPDATED = "Updated"
EVENT_REASON_DELETED = "Deleted"
EVENT_REASON_REPLACED = "Replaced"
EVENT_REASON_DRIFT_DETECTED = "DriftDetected"
