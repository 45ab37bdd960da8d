"""
GIR to Zig Binding Generator Package

Translates parsed GObject Introspection repositories into Zig modules:
  1. extern declarations for functions, constructors and methods
  2. extern structs/unions mirroring C layouts
  3. methods mixins emulating the GObject class hierarchy
  4. typed signal connection helpers
"""

from .types import (
    Alias, ArrayType, BitField, Callback, Class, Constant, Constructor, Enum,
    Field, Function, Include, Interface, Member, Method, Name, Namespace,
    Parameter, Record, Repository, ReturnValue, Signal, Type, Union_, VarArgs,
)
from .errors import (
    TranslationError, InvalidSchemaError, FileSystemError, CyclicDependencyError,
)
from .parser import GIRParser, parse_file
from .naming import to_camel_case, escape_identifier, escape_string
from .type_mapper import TypeMapper
from .zig_generator import ZigGenerator
from .repository import RepositoryLoader, IncludeResolver
from .translator import Translator, translate

__all__ = [
    'Alias', 'ArrayType', 'BitField', 'Callback', 'Class', 'Constant',
    'Constructor', 'Enum', 'Field', 'Function', 'Include', 'Interface',
    'Member', 'Method', 'Name', 'Namespace', 'Parameter', 'Record',
    'Repository', 'ReturnValue', 'Signal', 'Type', 'Union_', 'VarArgs',
    'TranslationError', 'InvalidSchemaError', 'FileSystemError',
    'CyclicDependencyError',
    'GIRParser', 'parse_file',
    'to_camel_case', 'escape_identifier', 'escape_string',
    'TypeMapper', 'ZigGenerator', 'RepositoryLoader', 'IncludeResolver',
    'Translator', 'translate',
]

__version__ = "0.1.0"
