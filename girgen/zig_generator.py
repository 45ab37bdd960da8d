"""Zig Generator - generates Zig extern declarations for a GIR namespace"""

from typing import Sequence

from .naming import escape_identifier, escape_string, to_camel_case, to_pascal_case
from .type_mapper import TypeMapper
from .types import (
    Alias, BitField, Callback, Class, Constant, Constructor, Enum, Field,
    Function, Interface, Member, Namespace, Record, Signal, Union_,
)

INDENT = ' ' * 4


class ZigGenerator:
    """Generates the body of a Zig module for one namespace"""

    def __init__(self, namespace: Namespace):
        self.namespace = namespace
        self.ns = namespace.name

    def generate(self, header: Sequence[str] = ()) -> str:
        """Generate the complete module text, header lines first"""
        lines = list(header)
        lines.extend(self.generate_declarations())
        return "".join(f"{line}\n" for line in lines)

    def generate_declarations(self) -> list[str]:
        """Generate all declarations, in a fixed order of member kinds"""
        ns = self.namespace
        lines = []
        for alias in ns.aliases:
            lines.extend(self._generate_alias(alias))
        for cls in ns.classes:
            lines.extend(self._generate_class(cls))
        for iface in ns.interfaces:
            lines.extend(self._generate_interface(iface))
        for record in ns.records:
            lines.extend(self._generate_record(record))
        for union in ns.unions:
            lines.extend(self._generate_union(union))
        for enum in ns.enums:
            lines.extend(self._generate_enum(enum))
        for bit_field in ns.bit_fields:
            lines.extend(self._generate_bit_field(bit_field))
        for function in ns.functions:
            lines.extend(self._generate_function(function, ''))
        for callback in ns.callbacks:
            lines.extend(self._generate_callback(callback))
        for constant in ns.constants:
            lines.extend(self._generate_constant(constant, ''))
        return lines

    def _generate_alias(self, alias: Alias) -> list[str]:
        return [f"pub const {alias.name} = {TypeMapper.to_zig(alias.type, self.ns)};", ""]

    def _generate_class(self, cls: Class) -> list[str]:
        """Generate the class struct and its methods mixin"""
        lines = [
            f"pub const {cls.name} = extern struct {{",
            f"{INDENT}const Self = {cls.name};",
            "",
        ]
        lines.extend(self._group(self._generate_field, cls.fields))
        lines.extend(self._group(self._generate_function, cls.functions, INDENT))
        lines.extend(self._group(self._generate_constructor, cls.constructors, INDENT))
        lines.extend(self._group(self._generate_constant, cls.constants, INDENT))
        lines.append(f"{INDENT}pub usingnamespace {cls.name}Methods(Self);")
        lines.extend(["};", ""])

        body = []
        for method in cls.methods:
            body.extend(self._generate_function(method, INDENT * 2))
        for signal in cls.signals:
            body.extend(self._generate_signal(signal, INDENT * 2))
        if cls.parent is not None:
            parent = TypeMapper.ns_prefix(cls.parent.ns, self.ns) + cls.parent.local
            mixin = f"{parent}Methods"
            body.extend([
                f"{INDENT * 2}pub fn as{cls.parent.local}(p_self: *Self) *{parent} {{",
                f"{INDENT * 3}return @ptrCast(*{parent}, p_self);",
                f"{INDENT * 2}}}",
                "",
                f"{INDENT * 2}pub usingnamespace {mixin}(Self);",
            ])
        lines.extend(self._methods_mixin(cls.name, body))
        return lines

    def _generate_interface(self, iface: Interface) -> list[str]:
        """Generate the opaque interface type and its methods mixin"""
        lines = [
            f"pub const {iface.name} = opaque {{",
            f"{INDENT}const Self = {iface.name};",
            "",
        ]
        lines.extend(self._group(self._generate_function, iface.functions, INDENT))
        lines.extend(self._group(self._generate_constructor, iface.constructors, INDENT))
        lines.extend(self._group(self._generate_constant, iface.constants, INDENT))
        lines.append(f"{INDENT}pub usingnamespace {iface.name}Methods(Self);")
        lines.extend(["};", ""])

        body = []
        for method in iface.methods:
            body.extend(self._generate_function(method, INDENT * 2))
        for signal in iface.signals:
            body.extend(self._generate_signal(signal, INDENT * 2))
        lines.extend(self._methods_mixin(iface.name, body))
        return lines

    def _methods_mixin(self, name: str, body: list[str]) -> list[str]:
        """Wrap method declarations in a function parameterized by Self.

        Subtypes include the mixin instantiated with their own type, so
        parent methods accept child instances without any vtable.
        """
        lines = [f"pub fn {name}Methods(comptime Self: type) type {{"]
        if not body:
            lines.append("_ = Self;")
        lines.append(f"{INDENT}return opaque {{")
        lines.extend(body)
        lines.extend([f"{INDENT}}};", "}", ""])
        return lines

    def _generate_record(self, record: Record) -> list[str]:
        return self._generate_container('extern struct', record)

    def _generate_union(self, union: Union_) -> list[str]:
        return self._generate_container('extern union', union)

    def _generate_container(self, kind: str, container) -> list[str]:
        """Generate a record or union with its functions declared inline"""
        lines = [
            f"pub const {container.name} = {kind} {{",
            f"{INDENT}const Self = {container.name};",
            "",
        ]
        lines.extend(self._group(self._generate_field, container.fields))
        lines.extend(self._group(self._generate_function, container.functions, INDENT))
        lines.extend(self._group(self._generate_constructor, container.constructors, INDENT))
        for method in container.methods:
            lines.extend(self._generate_function(method, INDENT))
        lines.extend(["};", ""])
        return lines

    def _generate_field(self, field: Field) -> list[str]:
        zig_type = TypeMapper.field_to_zig(field.type, self.ns)
        return [f"{INDENT}{escape_identifier(field.name)}: {zig_type},"]

    def _generate_enum(self, enum: Enum) -> list[str]:
        """Generate an enum backed by the narrowest sufficient integer"""
        lines = [f"pub const {enum.name} = enum({self._tag_type(enum.members)}) {{"]
        for member in enum.members:
            lines.append(f"{INDENT}{escape_identifier(member.name)} = {member.value},")
        lines.extend(["", f"{INDENT}const Self = {enum.name};"])
        lines.extend(self._attached_functions(enum.functions))
        lines.extend(["};", ""])
        return lines

    def _generate_bit_field(self, bit_field: BitField) -> list[str]:
        """Generate a packed struct with one bool per non-zero flag"""
        tag_type = self._tag_type(bit_field.members)
        padding = 64 if tag_type == 'i64' else 32
        lines = [f"pub const {bit_field.name} = packed struct({tag_type}) {{"]
        for member in bit_field.members:
            if member.value > 0:
                lines.append(f"{INDENT}{escape_identifier(member.name)}: bool = false,")
                padding -= 1
        if padding > 0:
            lines.append(f"{INDENT}_padding: u{padding} = 0,")
        lines.extend(["", f"{INDENT}const Self = {bit_field.name};"])
        lines.extend(self._attached_functions(bit_field.functions))
        lines.extend(["};", ""])
        return lines

    def _attached_functions(self, functions: list[Function]) -> list[str]:
        lines = []
        if functions:
            lines.append("")
            for function in functions:
                lines.extend(self._generate_function(function, INDENT * 2))
        return lines

    @staticmethod
    def _tag_type(members: list[Member]) -> str:
        if any(member.value >= 1 << 31 for member in members):
            return 'i64'
        return 'i32'

    def _generate_function(self, function: Function, indent: str) -> list[str]:
        """Generate an extern declaration plus a camelCase alias"""
        if function.moved_to is not None:
            return []
        ret = TypeMapper.return_to_zig(function.return_value, self.ns)
        return self._extern_fn(function, ret, indent)

    def _generate_constructor(self, constructor: Constructor, indent: str) -> list[str]:
        """Generate a constructor; GIR often declares a supertype as the return type"""
        if constructor.moved_to is not None:
            return []
        return self._extern_fn(constructor, '*Self', indent)

    def _extern_fn(self, function: Function, ret: str, indent: str) -> list[str]:
        c_identifier = escape_identifier(function.c_identifier)
        params = ', '.join(TypeMapper.param_to_zig(p, self.ns) for p in function.parameters)
        fn_name = escape_identifier(to_camel_case(function.name, '_'))
        return [
            f"{indent}extern fn {c_identifier}({params}) callconv(.C) {ret};",
            "",
            f"{indent}pub const {fn_name} = {c_identifier};",
            "",
        ]

    def _generate_signal(self, signal: Signal, indent: str) -> list[str]:
        """Generate a typed connectX helper over g_signal_connect_data"""
        gobject = TypeMapper.ns_prefix('gobject', self.ns)
        callback_params = ['*Self']
        callback_params.extend(TypeMapper.param_to_zig(p, self.ns) for p in signal.parameters)
        callback_params.append('?*anyopaque')
        ret = TypeMapper.return_to_zig(signal.return_value, self.ns)
        callback_type = f"*const fn ({', '.join(callback_params)}) callconv(.C) {ret}"
        connect_name = 'connect' + to_pascal_case(signal.name, '-')
        return [
            f"{indent}pub fn {connect_name}(p_self: *Self, p_callback: {callback_type}, "
            f"p_data: ?*anyopaque) c_ulong {{",
            # The only intentional type erasure: the callback signature above
            # must match what the signal emits.
            f'{indent}{INDENT}return {gobject}signalConnectData(p_self, "{escape_string(signal.name)}", '
            f"@ptrCast({gobject}Callback, p_callback), p_data, null, .{{}});",
            f"{indent}}}",
            "",
        ]

    def _generate_callback(self, callback: Callback) -> list[str]:
        # TODO: drop once self-referential function pointer types work in Zig
        # (ziglang/zig#12325)
        if callback.name == 'ClosureNotify':
            return [
                "pub const ClosureNotify = ?*const fn (p_data: ?*anyopaque, "
                "p_closure: *anyopaque) callconv(.C) void;",
                "",
            ]
        return [f"pub const {callback.name} = {TypeMapper.callback_to_zig(callback, self.ns)};", ""]

    def _generate_constant(self, constant: Constant, indent: str) -> list[str]:
        # Names keep their casing: GDK has KEY_A and KEY_a
        zig_type = TypeMapper.any_to_zig(constant.type, self.ns)
        if TypeMapper.is_string(constant.type):
            value = f'"{escape_string(constant.value)}"'
        else:
            value = constant.value
        return [f"{indent}pub const {escape_identifier(constant.name)}: {zig_type} = {value};", ""]

    def _group(self, generate, items: list, *args) -> list[str]:
        """Generate a group of declarations, followed by a blank line if non-empty"""
        lines = []
        for item in items:
            lines.extend(generate(item, *args))
        if items:
            lines.append("")
        return lines
