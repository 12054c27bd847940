# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:10:42
# @Author : Kariko Lin


class ConfError(Exception):
    """Base of everything raised by `pycastor.conf`."""
    pass


class InvalidName(ConfError, ValueError):
    """Key or section names may neither be empty nor contain a `.`."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Invalid node name "{name}": '
                         'must be non-empty and must not contain "."')
        self.name = name


class ParseError(ConfError):
    """Fatal. The whole load is aborted and no tree is kept."""

    def __init__(self, source: str, line: int, reason: str) -> None:
        super().__init__(f'{source}, line {line}: {reason}')
        self.source = source
        self.line = line
        self.reason = reason


class PathNotFound(ConfError, LookupError):
    def __init__(
        self, path: str, component: str | None = None,
        source: str | None = None
    ) -> None:
        msg = f'Path "{path}" not found'
        if component is not None and component != path:
            msg = f'Path element "{component}" ({path}) not found'
        if source:
            msg += f' in {source}'
        super().__init__(msg)
        self.path = path
        self.component = component
        self.source = source


class ConversionError(ConfError, ValueError):
    def __init__(self, path: str, raw_value: str, target_type: str) -> None:
        super().__init__(
            f'Cannot convert "{raw_value}" at {path} to {target_type}')
        self.path = path
        self.raw_value = raw_value
        self.target_type = target_type


class DuplicateSection(UserWarning):
    """A sibling section of the same name was already defined.

    The later one is skipped as a whole, nested sections included.
    """

    def __init__(self, name: str, line: int, source: str) -> None:
        super().__init__(
            f'Section [{name}] already defined in {source} '
            f'(line {line} ignored)')
        self.name = name
        self.line = line
        self.source = source
