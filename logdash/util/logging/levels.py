# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

from __future__ import annotations

import logging

from typing import Any, ClassVar, override

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, PydanticUseDefault, core_schema


LEVELS : dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR"   : logging.ERROR   ,
    "WARNING" : logging.WARNING ,
    "INFO"    : logging.INFO    ,
    "DEBUG"   : logging.DEBUG   ,
    "NOTSET"  : logging.NOTSET  ,
    "OFF"     : -1,
}  # fmt: skip

REVERSE_LEVELS: dict[int, str] = {v: k for k, v in LEVELS.items()}


class LoggingLevel:
    """A logging level that can be written as a name, a number or a boolean.

    ``OFF`` (-1) disables the handler it is applied to.
    """

    # fmt: off
    CRITICAL : ClassVar[LoggingLevel]
    ERROR    : ClassVar[LoggingLevel]
    WARNING  : ClassVar[LoggingLevel]
    INFO     : ClassVar[LoggingLevel]
    DEBUG    : ClassVar[LoggingLevel]
    NOTSET   : ClassVar[LoggingLevel]
    OFF      : ClassVar[LoggingLevel]
    # fmt: on

    def __init__(self, value: Any) -> None:
        self.value: int = type(self).coerce(value)

    @classmethod
    def coerce(cls, value: Any) -> int:
        if isinstance(value, LoggingLevel):
            return value.value

        # bool must be tested before int, as it is a subclass
        if isinstance(value, bool):
            level = logging.INFO if value else -1
        elif isinstance(value, int):
            level = value
        elif isinstance(value, str):
            upper = value.strip().upper()
            if upper in LEVELS:
                level = LEVELS[upper]
            elif upper in ("FALSE", "NO"):
                level = -1
            else:
                try:
                    level = int(upper)
                except ValueError as err:
                    msg = f"Unknown logging level string: {value}"
                    raise ValueError(msg) from err
        else:
            msg = f"Invalid type for logging level: {type(value)}"
            raise TypeError(msg)

        if level < -1:
            msg = f"Invalid value for logging level: {level}"
            raise ValueError(msg)

        return level

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            function=cls.validate,
            schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(LoggingLevel),
                    core_schema.bool_schema(strict=True),
                    core_schema.int_schema(),
                    core_schema.str_schema(),
                    core_schema.none_schema(),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def validate(cls, value: Any) -> LoggingLevel:
        # 'None' falls back to the field default
        if value is None:
            raise PydanticUseDefault
        return cls(value)

    @property
    def name(self) -> str:
        return REVERSE_LEVELS.get(self.value, str(self.value))

    @property
    def enabled(self) -> bool:
        return self.value >= 0

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, LoggingLevel):
            return self.value == other.value
        elif isinstance(other, int):
            return self.value == other
        elif isinstance(other, str):
            return self.name == other.upper()
        return False

    def __int__(self) -> int:
        return self.value

    @override
    def __hash__(self) -> int:
        return hash(self.value)

    @override
    def __repr__(self) -> str:
        name = REVERSE_LEVELS.get(self.value)
        if name is not None:
            return f"LoggingLevel.{name}"
        return f"LoggingLevel({self.value})"

    @override
    def __str__(self) -> str:
        return self.name


for _name, _value in LEVELS.items():
    setattr(LoggingLevel, _name, LoggingLevel(_value))
