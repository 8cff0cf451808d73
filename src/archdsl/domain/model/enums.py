"""Domain enumerations."""

from enum import Enum, auto


class NodeKind(Enum):
    """Variant tag of an architecture tree node."""

    WORKSPACE = "workspace"
    PERSON = "person"
    SOFTWARE_SYSTEM = "software system"
    CONTAINER = "container"
    COMPONENT = "component"
    DEPLOYMENT_NODE = "deployment node"
    INFRASTRUCTURE_NODE = "infrastructure node"
    CONTAINER_INSTANCE = "container instance"
    HEALTH_CHECK = "health check"


class ElementLocation(Enum):
    """Position of an element relative to the enterprise boundary."""

    UNSPECIFIED = auto()
    INTERNAL = auto()
    EXTERNAL = auto()


class Capability(Enum):
    """Attribute family a node kind may carry.

    Each DSL attribute operation requires exactly one capability.
    """

    TAGS = auto()  # Tag
    URL = auto()  # URL
    LOCATION = auto()  # External
    PROPERTIES = auto()  # Properties, Prop
    WORKSPACE_SETTINGS = auto()  # Version, Enterprise


class DiagnosticKind(Enum):
    """Category of a recorded DSL diagnostic."""

    INCOMPATIBLE_CONTEXT = "incompatible DSL"
    INVALID_ARGUMENT = "invalid argument"
    VALIDATION_ERROR = "validation error"
    MISSING_BODY = "missing child DSL"
