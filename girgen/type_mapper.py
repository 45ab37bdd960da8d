"""Type mapping from GIR type references to Zig types"""

from typing import Optional

from .logging import get_logger
from .naming import escape_identifier
from .types import (
    AnyType, ArrayType, Callback, Name, Parameter, ReturnValue, Type, VarArgs,
)

logger = get_logger("type_mapper")


class TypeMapper:
    """Maps GIR type references to Zig type syntax"""

    # Fundamental GLib/C types
    BUILTINS = {
        'gboolean': 'bool',
        'gchar': 'u8',
        'guchar': 'u8',
        'gint8': 'i8',
        'guint8': 'u8',
        'gint16': 'i16',
        'guint16': 'u16',
        'gint32': 'i32',
        'guint32': 'u32',
        'gint64': 'i64',
        'guint64': 'u64',
        'gshort': 'c_short',
        'gushort': 'c_ushort',
        'gint': 'c_int',
        'guint': 'c_uint',
        'glong': 'c_long',
        'gulong': 'c_ulong',
        'gsize': 'usize',
        'gssize': 'isize',
        'gunichar2': 'u16',
        'gunichar': 'u32',
        'gfloat': 'f32',
        'gdouble': 'f64',
        'long double': 'c_longdouble',
        'gpointer': '?*anyopaque',
        'gconstpointer': '?*const anyopaque',
        'va_list': '@compileError("va_list not supported")',
        'none': 'void',
    }

    # Type-erased pointers, matched on the C spelling before anything else
    OPAQUE_POINTERS = {
        'gpointer': '?*anyopaque',
        'gconstpointer': '?*const anyopaque',
    }

    STRING_TYPES = ('utf8', 'filename')

    UNTRANSLATABLE = '@compileError("type not implemented")'
    VARARGS = '@compileError("varargs not implemented")'

    @classmethod
    def to_zig(cls, gir_type: Type, ns: str) -> str:
        """Convert a simple type reference to a Zig type"""
        c_type = gir_type.c_type or ''
        if c_type in cls.OPAQUE_POINTERS:
            return cls.OPAQUE_POINTERS[c_type]

        if gir_type.name is None:
            return cls.UNTRANSLATABLE
        name = gir_type.name

        if name.local == 'GType':
            name = Name(ns='gobject', local='Type')

        out = []
        # "const" on a non-pointer type (e.g. const gint) means nothing to Zig
        pointer = False

        if name.ns is None and name.local in cls.STRING_TYPES:
            name = Name(ns=None, local='gchar')
            if not c_type:
                c_type = 'char*'
            if c_type.endswith('*'):
                pointer = True
                out.append('[*:0]')
                c_type = c_type[:-1]

        while True:
            if c_type.endswith('*'):
                pointer = True
                out.append('*')
                c_type = c_type[:-1]
            elif c_type.startswith('const '):
                if pointer:
                    out.append('const ')
                c_type = c_type[len('const '):]
            else:
                break

        if name.ns is None and name.local in cls.BUILTINS:
            out.append(cls.BUILTINS[name.local])
        else:
            out.append(cls.ns_prefix(name.ns, ns))
            out.append(name.local)
        return ''.join(out)

    @classmethod
    def array_to_zig(cls, array_type: ArrayType, ns: str) -> str:
        """Convert an array type reference to a Zig array or many-pointer"""
        if array_type.fixed_size is not None:
            prefix = f'[{array_type.fixed_size}]'
        else:
            prefix = '[*]'
        return prefix + cls.any_to_zig(array_type.element, ns)

    @classmethod
    def any_to_zig(cls, gir_type: AnyType, ns: str) -> str:
        """Convert a simple or array type reference"""
        if isinstance(gir_type, ArrayType):
            return cls.array_to_zig(gir_type, ns)
        return cls.to_zig(gir_type, ns)

    @classmethod
    def field_to_zig(cls, field_type, ns: str) -> str:
        """Convert a field type, which may be an inline callback"""
        if isinstance(field_type, Callback):
            return cls.callback_to_zig(field_type, ns)
        return cls.any_to_zig(field_type, ns)

    @classmethod
    def callback_to_zig(cls, callback: Callback, ns: str) -> str:
        """Convert a callback signature to a nullable function pointer type.

        Unlike functions, the return type is never made optional.
        """
        params = ', '.join(cls.param_to_zig(p, ns) for p in callback.parameters)
        ret = cls.any_to_zig(callback.return_value.type, ns)
        return f'?*const fn ({params}) callconv(.C) {ret}'

    @classmethod
    def param_to_zig(cls, param: Parameter, ns: str) -> str:
        """Convert parameter to a Zig parameter declaration"""
        return f'{cls.param_name(param.name)}: {cls.param_type(param, ns)}'

    @classmethod
    def param_type(cls, param: Parameter, ns: str) -> str:
        """Get the Zig type of a parameter"""
        if param.instance:
            c_type = ''
            if isinstance(param.type, Type):
                c_type = param.type.c_type or ''
            if c_type.startswith('const '):
                return '*const Self'
            return '*Self'
        if isinstance(param.type, VarArgs):
            logger.debug("Variadic parameter %s is not supported", param.name)
            return cls.VARARGS
        return cls.any_to_zig(param.type, ns)

    @classmethod
    def param_name(cls, name: str) -> str:
        """Parameter names are prefixed to avoid clashing with declarations"""
        return escape_identifier(f'p_{name}')

    @classmethod
    def return_to_zig(cls, return_value: ReturnValue, ns: str) -> str:
        """Convert a return value, optional when nullable"""
        ret = cls.any_to_zig(return_value.type, ns)
        if return_value.nullable:
            return '?' + ret
        return ret

    @classmethod
    def ns_prefix(cls, name_ns: Optional[str], ns: str) -> str:
        """Get the module prefix for a type defined in name_ns"""
        if name_ns is None or name_ns.lower() == ns.lower():
            return ''
        return f'{name_ns.lower()}.'

    @classmethod
    def is_string(cls, gir_type: AnyType) -> bool:
        """Check if a type reference denotes UTF-8 text"""
        return (
            isinstance(gir_type, Type)
            and gir_type.name is not None
            and gir_type.name.local == 'utf8'
        )
