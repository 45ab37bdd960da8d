"""Data types for parsed GIR repositories"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Name:
    """Possibly namespace-qualified type name (e.g. Gtk.Widget)"""
    ns: Optional[str]
    local: str

    @classmethod
    def parse(cls, raw: str) -> 'Name':
        ns, sep, local = raw.partition('.')
        if not sep:
            return cls(ns=None, local=raw)
        return cls(ns=ns, local=local)


@dataclass
class Include:
    """Cross-repository dependency"""
    name: str
    version: str

    @property
    def source(self) -> str:
        """Repository file name this include refers to"""
        return f'{self.name}-{self.version}.gir'


@dataclass
class Type:
    """Simple type reference"""
    name: Optional[Name] = None
    c_type: Optional[str] = None


@dataclass
class ArrayType:
    """Array type reference; fixed_size is None for unbounded arrays"""
    element: 'AnyType'
    fixed_size: Optional[int] = None


@dataclass
class VarArgs:
    """C variadic parameter marker"""


@dataclass
class Parameter:
    """Function parameter"""
    name: str
    type: 'ParameterType'
    instance: bool = False


def _void() -> Type:
    return Type(name=Name(ns=None, local='none'), c_type='void')


@dataclass
class ReturnValue:
    """Function return value, void unless given"""
    type: 'AnyType' = field(default_factory=_void)
    nullable: bool = False


@dataclass
class Callback:
    """Function pointer signature, named or inline"""
    name: str
    parameters: list[Parameter] = field(default_factory=list)
    return_value: ReturnValue = field(default_factory=ReturnValue)


AnyType = Union[Type, ArrayType]
FieldType = Union[Type, ArrayType, Callback]
ParameterType = Union[Type, ArrayType, VarArgs]


@dataclass
class Function:
    """Free function, constructor or method"""
    name: str
    c_identifier: str
    parameters: list[Parameter] = field(default_factory=list)
    return_value: ReturnValue = field(default_factory=ReturnValue)
    moved_to: Optional[str] = None


class Constructor(Function):
    """Constructor; the generated return type is always the owning type"""


class Method(Function):
    """Instance method"""


@dataclass
class Signal:
    """Object signal"""
    name: str
    parameters: list[Parameter] = field(default_factory=list)
    return_value: ReturnValue = field(default_factory=ReturnValue)


@dataclass
class Field:
    """Struct/union/class field"""
    name: str
    type: FieldType


@dataclass
class Constant:
    """Constant value"""
    name: str
    type: AnyType
    value: str


@dataclass
class Alias:
    """Type alias"""
    name: str
    type: Type


@dataclass
class Class:
    """GObject class definition"""
    name: str
    parent: Optional[Name] = None
    fields: list[Field] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    constructors: list[Constructor] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)
    signals: list[Signal] = field(default_factory=list)
    constants: list[Constant] = field(default_factory=list)


@dataclass
class Interface:
    """GObject interface definition"""
    name: str
    functions: list[Function] = field(default_factory=list)
    constructors: list[Constructor] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)
    signals: list[Signal] = field(default_factory=list)
    constants: list[Constant] = field(default_factory=list)


@dataclass
class Record:
    """C struct definition"""
    name: str
    fields: list[Field] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    constructors: list[Constructor] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)


@dataclass
class Union_:
    """C union definition"""
    name: str
    fields: list[Field] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    constructors: list[Constructor] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)


@dataclass
class Member:
    """Enum or bit field member"""
    name: str
    value: int


@dataclass
class Enum:
    """Enumeration definition"""
    name: str
    members: list[Member] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)


@dataclass
class BitField:
    """Bit flag set definition"""
    name: str
    members: list[Member] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)


@dataclass
class Namespace:
    """Named group of declarations; one output module each"""
    name: str
    version: str = ''
    aliases: list[Alias] = field(default_factory=list)
    classes: list[Class] = field(default_factory=list)
    interfaces: list[Interface] = field(default_factory=list)
    records: list[Record] = field(default_factory=list)
    unions: list[Union_] = field(default_factory=list)
    enums: list[Enum] = field(default_factory=list)
    bit_fields: list[BitField] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    callbacks: list[Callback] = field(default_factory=list)
    constants: list[Constant] = field(default_factory=list)


@dataclass
class Repository:
    """Complete parsed GIR document"""
    path: str = ''
    includes: list[Include] = field(default_factory=list)
    namespaces: list[Namespace] = field(default_factory=list)
