from .binder import Binder, CustomBinder, ParameterOutput
from .event import Event
from .exceptions import (
    BinderError,
    DateParseError,
    EncodingError,
    InvalidFieldSpec,
    InvalidParameterType,
    NumberFormatError,
    UnimplementedBinderError,
)
from .factory import BinderConfig, build_binders, new_binder
from .field import FieldSpec, Source, parse_field_spec
from .registry import register_binder, unregister_binder
from .statement import StatementParameters, bind_event, bind_events

__all__ = [
    "Binder",
    "BinderConfig",
    "BinderError",
    "CustomBinder",
    "DateParseError",
    "EncodingError",
    "Event",
    "FieldSpec",
    "InvalidFieldSpec",
    "InvalidParameterType",
    "NumberFormatError",
    "ParameterOutput",
    "Source",
    "StatementParameters",
    "UnimplementedBinderError",
    "bind_event",
    "bind_events",
    "build_binders",
    "new_binder",
    "parse_field_spec",
    "register_binder",
    "unregister_binder",
]
