"""GObject Introspection (GIR) XML parser"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Union

from .errors import FileSystemError, InvalidSchemaError
from .types import (
    Alias, AnyType, ArrayType, BitField, Callback, Class, Constant, Constructor,
    Enum, Field, Function, Include, Interface, Member, Method, Name, Namespace,
    Parameter, Record, Repository, ReturnValue, Signal, Type, Union_, VarArgs,
)

CORE_NS = 'http://www.gtk.org/introspection/core/1.0'
C_NS = 'http://www.gtk.org/introspection/c/1.0'
GLIB_NS = 'http://www.gtk.org/introspection/glib/1.0'


def _core(tag: str) -> str:
    return f'{{{CORE_NS}}}{tag}'


def _c(attr: str) -> str:
    return f'{{{C_NS}}}{attr}'


def _glib(tag: str) -> str:
    return f'{{{GLIB_NS}}}{tag}'


class GIRParser:
    """Parses GIR documents into Repository objects"""

    def __init__(self, content: Union[str, bytes], path: str = ''):
        self.content = content
        self.path = path

    def parse(self) -> Repository:
        try:
            root = ET.fromstring(self.content)
        except ET.ParseError as e:
            raise InvalidSchemaError(f"Malformed GIR document: {e}", {"path": self.path}) from e
        if root.tag != _core('repository'):
            raise InvalidSchemaError(
                f"Expected <repository> root element, found <{root.tag}>", {"path": self.path}
            )

        result = Repository(path=self.path)
        result.includes = [
            Include(name=self._attr(e, 'name'), version=self._attr(e, 'version'))
            for e in root.findall(_core('include'))
        ]
        result.namespaces = [self._parse_namespace(e) for e in root.findall(_core('namespace'))]
        return result

    def _attr(self, element: ET.Element, name: str) -> str:
        """Get a required attribute"""
        value = element.get(name)
        if value is None:
            local_tag = element.tag.rpartition('}')[2]
            raise InvalidSchemaError(
                f"<{local_tag}> is missing required attribute '{name}'", {"path": self.path}
            )
        return value

    def _parse_namespace(self, element: ET.Element) -> Namespace:
        ns = Namespace(name=self._attr(element, 'name'), version=element.get('version', ''))
        for child in element:
            tag = child.tag
            if tag == _core('alias'):
                ns.aliases.append(Alias(name=self._attr(child, 'name'), type=self._parse_simple_type(child)))
            elif tag == _core('class'):
                ns.classes.append(self._parse_class(child))
            elif tag == _core('interface'):
                ns.interfaces.append(self._parse_interface(child))
            elif tag == _core('record'):
                ns.records.append(self._parse_container(Record, child))
            elif tag == _core('union'):
                ns.unions.append(self._parse_container(Union_, child))
            elif tag == _core('enumeration'):
                ns.enums.append(self._parse_enum(Enum, child))
            elif tag == _core('bitfield'):
                ns.bit_fields.append(self._parse_enum(BitField, child))
            elif tag == _core('function'):
                ns.functions.append(self._parse_function(Function, child))
            elif tag == _core('callback'):
                ns.callbacks.append(self._parse_callback(child))
            elif tag == _core('constant'):
                ns.constants.append(self._parse_constant(child))
        return ns

    def _parse_class(self, element: ET.Element) -> Class:
        parent = element.get('parent')
        cls = Class(
            name=self._attr(element, 'name'),
            parent=Name.parse(parent) if parent else None,
        )
        cls.fields = self._parse_fields(element)
        self._parse_callables(element, cls)
        cls.signals = [self._parse_signal(e) for e in element.findall(_glib('signal'))]
        cls.constants = [self._parse_constant(e) for e in element.findall(_core('constant'))]
        return cls

    def _parse_interface(self, element: ET.Element) -> Interface:
        iface = Interface(name=self._attr(element, 'name'))
        self._parse_callables(element, iface)
        iface.signals = [self._parse_signal(e) for e in element.findall(_glib('signal'))]
        iface.constants = [self._parse_constant(e) for e in element.findall(_core('constant'))]
        return iface

    def _parse_container(self, kind, element: ET.Element):
        """Parse a record or union"""
        container = kind(name=self._attr(element, 'name'))
        container.fields = self._parse_fields(element)
        self._parse_callables(element, container)
        return container

    def _parse_callables(self, element: ET.Element, owner) -> None:
        owner.functions = [self._parse_function(Function, e) for e in element.findall(_core('function'))]
        owner.constructors = [
            self._parse_function(Constructor, e) for e in element.findall(_core('constructor'))
        ]
        owner.methods = [self._parse_function(Method, e) for e in element.findall(_core('method'))]

    def _parse_fields(self, element: ET.Element) -> list[Field]:
        fields = []
        for e in element.findall(_core('field')):
            callback = e.find(_core('callback'))
            if callback is not None:
                field_type = self._parse_callback(callback)
            else:
                field_type = self._parse_any_type(e)
            fields.append(Field(name=self._attr(e, 'name'), type=field_type))
        return fields

    def _parse_enum(self, kind, element: ET.Element):
        """Parse an enumeration or bitfield"""
        members = []
        for e in element.findall(_core('member')):
            raw_value = self._attr(e, 'value')
            try:
                value = int(raw_value)
            except ValueError as err:
                raise InvalidSchemaError(
                    f"Member {e.get('name')} has non-integer value {raw_value!r}", {"path": self.path}
                ) from err
            members.append(Member(name=self._attr(e, 'name'), value=value))
        functions = [self._parse_function(Function, e) for e in element.findall(_core('function'))]
        return kind(name=self._attr(element, 'name'), members=members, functions=functions)

    def _parse_function(self, kind, element: ET.Element) -> Function:
        return kind(
            name=self._attr(element, 'name'),
            c_identifier=element.get(_c('identifier')) or self._attr(element, 'name'),
            parameters=self._parse_parameters(element),
            return_value=self._parse_return_value(element),
            moved_to=element.get('moved-to'),
        )

    def _parse_signal(self, element: ET.Element) -> Signal:
        return Signal(
            name=self._attr(element, 'name'),
            parameters=self._parse_parameters(element),
            return_value=self._parse_return_value(element),
        )

    def _parse_callback(self, element: ET.Element) -> Callback:
        return Callback(
            name=element.get('name', ''),
            parameters=self._parse_parameters(element),
            return_value=self._parse_return_value(element),
        )

    def _parse_parameters(self, element: ET.Element) -> list[Parameter]:
        params_element = element.find(_core('parameters'))
        if params_element is None:
            return []
        params = []
        for e in params_element:
            if e.tag == _core('instance-parameter'):
                params.append(Parameter(name=self._attr(e, 'name'), type=self._parse_any_type(e), instance=True))
            elif e.tag == _core('parameter'):
                if e.find(_core('varargs')) is not None:
                    param_type = VarArgs()
                else:
                    param_type = self._parse_any_type(e)
                params.append(Parameter(name=self._attr(e, 'name'), type=param_type))
        return params

    def _parse_return_value(self, element: ET.Element) -> ReturnValue:
        e = element.find(_core('return-value'))
        if e is None:
            return ReturnValue()
        nullable = e.get('nullable') == '1' or e.get('allow-none') == '1'
        return ReturnValue(type=self._parse_any_type(e), nullable=nullable)

    def _parse_constant(self, element: ET.Element) -> Constant:
        return Constant(
            name=self._attr(element, 'name'),
            type=self._parse_any_type(element),
            value=self._attr(element, 'value'),
        )

    def _parse_any_type(self, element: ET.Element) -> AnyType:
        """Parse the <type> or <array> child of element"""
        for child in element:
            if child.tag == _core('type'):
                return self._type_from(child)
            if child.tag == _core('array'):
                return self._parse_array(child)
        return Type()

    def _parse_simple_type(self, element: ET.Element) -> Type:
        child = element.find(_core('type'))
        if child is None:
            return Type()
        return self._type_from(child)

    def _parse_array(self, element: ET.Element) -> AnyType:
        # GLib containers (GArray, GPtrArray, GByteArray) are named arrays
        # but opaque structs in C
        if element.get('name'):
            return self._type_from(element)
        fixed_size = element.get('fixed-size')
        try:
            size: Optional[int] = int(fixed_size) if fixed_size is not None else None
        except ValueError as err:
            raise InvalidSchemaError(f"Invalid array size {fixed_size!r}", {"path": self.path}) from err
        return ArrayType(element=self._parse_any_type(element), fixed_size=size)

    @staticmethod
    def _type_from(element: ET.Element) -> Type:
        name = element.get('name')
        return Type(name=Name.parse(name) if name else None, c_type=element.get(_c('type')))


def parse_file(path: Union[str, Path]) -> Repository:
    """Parse a GIR file, the default parser used by RepositoryLoader"""
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise FileSystemError(f"Cannot read {path}: {e.strerror}", {"path": str(path)}) from e
    return GIRParser(content, str(path)).parse()
