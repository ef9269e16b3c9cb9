"""Configuration for leaf XPath generation.

This module provides the immutable configuration object consumed by every
path-construction component, together with the normalizer that turns a raw,
possibly sparse JSON-style record into a fully populated configuration.
"""

import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

DEFAULT_NAMESPACE = "d"


class SiblingIdentity(Enum):
    """Comparison key used to group siblings for indexing."""

    TAG = "tag"                              # Local tag name only
    TAG_AND_ATTRIBUTES = "tag_and_attributes"  # Tag plus attribute predicates


class StartStrategy(Enum):
    """How ``startAtTag`` re-roots emitted paths."""

    ROOTED = "rooted"        # Traverse from the resolved start element
    TRUNCATE = "truncate"    # Build from the root, then trim each path


class LeafValuePlacement(Enum):
    """Position of the leaf-value predicate within the leaf segment."""

    BEFORE_INDEX = "before_index"
    AFTER_INDEX = "after_index"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when a configuration value has the wrong shape."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


# Wire (camelCase) key -> dataclass field name
_KEY_TO_FIELD: Dict[str, str] = {
    "namespace": "namespace",
    "attributesToIncludeInPath": "attributes_to_include_in_path",
    "childFilters": "child_filters",
    "includeChildValuePredicates": "include_child_value_predicates",
    "ignoreLeafNodes": "ignore_leaf_nodes",
    "forceIndexOneFor": "force_index_one_for",
    "exceptionsToIndexOneForcing": "exceptions_to_index_one_forcing",
    "disableLeafNodeIndexing": "disable_leaf_node_indexing",
    "includeLeafValuePredicate": "include_leaf_value_predicate",
    "leafValuePredicatePlacement": "leaf_value_placement",
    "siblingIdentity": "sibling_identity",
    "startAtTag": "start_at_tag",
    "startStrategy": "start_strategy",
    "debug": "debug",
}
_FIELD_TO_KEY: Dict[str, str] = {value: key for key, value in _KEY_TO_FIELD.items()}

_NAME_LIST_FIELDS = (
    "attributes_to_include_in_path",
    "ignore_leaf_nodes",
    "force_index_one_for",
    "exceptions_to_index_one_forcing",
)
_BOOL_FIELDS = (
    "include_child_value_predicates",
    "disable_leaf_node_indexing",
    "include_leaf_value_predicate",
    "debug",
)


def _name_list(field_name: str, value: Any) -> Tuple[str, ...]:
    """Validate a list of tag/attribute names and freeze it into a tuple."""
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigValidationError(
            f"{_FIELD_TO_KEY[field_name]} must be a list of names, "
            f"got {type(value).__name__}",
            field_name=field_name,
            suggestions=[f'Wrap the value in a list, e.g. ["{value}"]']
            if isinstance(value, str) else [],
        )
    names = list(value)
    for name in names:
        if not isinstance(name, str) or not name:
            raise ConfigValidationError(
                f"{_FIELD_TO_KEY[field_name]} entries must be non-empty strings, "
                f"got {name!r}",
                field_name=field_name,
            )
    return tuple(names)


def _enum_value(field_name: str, enum_type: Any, value: Any) -> Any:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError as e:
        valid = [member.value for member in enum_type]
        raise ConfigValidationError(
            f"{_FIELD_TO_KEY[field_name]} must be one of {valid}, got {value!r}",
            field_name=field_name,
            suggestions=valid,
        ) from e


@dataclass(frozen=True)
class XPathConfig:
    """Immutable configuration for leaf path construction.

    Instances are validated on construction and never change afterwards; use
    :meth:`override` to derive a modified copy. Name lists are stored as
    tuples so that predicate order follows the caller's order.
    """

    namespace: str = DEFAULT_NAMESPACE
    attributes_to_include_in_path: Tuple[str, ...] = ()
    child_filters: Optional[Tuple[str, ...]] = None
    include_child_value_predicates: bool = False
    ignore_leaf_nodes: Tuple[str, ...] = ()
    force_index_one_for: Tuple[str, ...] = ()
    exceptions_to_index_one_forcing: Tuple[str, ...] = ()
    disable_leaf_node_indexing: bool = False
    include_leaf_value_predicate: Optional[bool] = None
    leaf_value_placement: LeafValuePlacement = LeafValuePlacement.BEFORE_INDEX
    sibling_identity: SiblingIdentity = SiblingIdentity.TAG_AND_ATTRIBUTES
    start_at_tag: Optional[str] = None
    start_strategy: StartStrategy = StartStrategy.ROOTED
    debug: bool = False

    # Unrecognized keys are carried along but never consulted
    extras: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        """Validate shapes and resolve derived defaults exactly once."""
        set_ = object.__setattr__  # frozen dataclass

        if self.namespace is None or self.namespace == "":
            set_(self, "namespace", DEFAULT_NAMESPACE)
        elif not isinstance(self.namespace, str):
            raise ConfigValidationError(
                f"namespace must be a string, got {type(self.namespace).__name__}",
                field_name="namespace",
            )

        for name in _NAME_LIST_FIELDS:
            set_(self, name, _name_list(name, getattr(self, name)))
        if self.child_filters is not None:
            set_(self, "child_filters", _name_list("child_filters", self.child_filters))

        if self.include_leaf_value_predicate is None:
            if not isinstance(self.disable_leaf_node_indexing, bool):
                raise ConfigValidationError(
                    "disableLeafNodeIndexing must be a boolean",
                    field_name="disable_leaf_node_indexing",
                )
            set_(self, "include_leaf_value_predicate", not self.disable_leaf_node_indexing)
        for name in _BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise ConfigValidationError(
                    f"{_FIELD_TO_KEY[name]} must be a boolean, "
                    f"got {type(getattr(self, name)).__name__}",
                    field_name=name,
                    suggestions=["Use true or false"],
                )

        if self.start_at_tag == "":
            set_(self, "start_at_tag", None)
        elif self.start_at_tag is not None and not isinstance(self.start_at_tag, str):
            raise ConfigValidationError(
                f"startAtTag must be a string, got {type(self.start_at_tag).__name__}",
                field_name="start_at_tag",
            )

        set_(self, "sibling_identity",
             _enum_value("sibling_identity", SiblingIdentity, self.sibling_identity))
        set_(self, "start_strategy",
             _enum_value("start_strategy", StartStrategy, self.start_strategy))
        set_(self, "leaf_value_placement",
             _enum_value("leaf_value_placement", LeafValuePlacement,
                         self.leaf_value_placement))

        if not isinstance(self.extras, Mapping):
            raise ConfigValidationError("extras must be a mapping", field_name="extras")
        set_(self, "extras", MappingProxyType(dict(self.extras)))

    @property
    def forces_all_index_one(self) -> bool:
        """Empty ``forceIndexOneFor`` means an explicit ``[1]`` for every tag."""
        return not self.force_index_one_for

    def is_ignored(self, local_name: str) -> bool:
        """Check whether elements with this local name are skipped."""
        return local_name in self.ignore_leaf_nodes

    def qualify(self, local_name: str) -> str:
        """Prefix a local name with the configured namespace."""
        return f"{self.namespace}:{local_name}"

    def override(self, **kwargs: Any) -> "XPathConfig":
        """Create a new configuration with specific field overrides.

        Example:
            >>> config = XPathConfig()
            >>> config.override(start_at_tag="item").start_at_tag
            'item'
        """
        if "disable_leaf_node_indexing" in kwargs and "include_leaf_value_predicate" not in kwargs:
            kwargs["include_leaf_value_predicate"] = None
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to its camelCase wire format."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extras":
                continue
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            result[_FIELD_TO_KEY[f.name]] = value
        result.update(self.extras)
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "XPathConfig":
        """Normalize a raw configuration record.

        Missing options receive their documented defaults, unknown keys are
        kept in :attr:`extras`.

        Raises:
            ConfigError: If ``data`` is not a mapping.
            ConfigValidationError: If a value has the wrong shape.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(
                f"Configuration must be a JSON object, got {type(data).__name__}"
            )

        values: Dict[str, Any] = {}
        extras: Dict[str, Any] = {}
        for key, value in data.items():
            field_name = _KEY_TO_FIELD.get(key)
            if field_name is None:
                extras[key] = value
            elif value is not None:
                values[field_name] = value
        return cls(extras=extras, **values)

    @classmethod
    def from_json(cls, json_str: str) -> "XPathConfig":
        """Create configuration from a JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON configuration: {e}") from e
        return cls.from_dict(data)


def normalize_config(raw: Optional[Mapping[str, Any]] = None) -> XPathConfig:
    """Fill a raw configuration record with defaults and validate it."""
    if isinstance(raw, XPathConfig):
        return raw
    return XPathConfig.from_dict(raw)
