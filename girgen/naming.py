"""Identifier conversion and escaping for generated Zig code"""

import re

ZIG_KEYWORDS = frozenset({
    'addrspace', 'align', 'allowzero', 'and', 'anyframe', 'anytype', 'asm',
    'async', 'await', 'break', 'callconv', 'catch', 'comptime', 'const',
    'continue', 'defer', 'else', 'enum', 'errdefer', 'error', 'export',
    'extern', 'fn', 'for', 'if', 'inline', 'linksection', 'noalias',
    'noinline', 'nosuspend', 'opaque', 'or', 'orelse', 'packed', 'pub',
    'resume', 'return', 'struct', 'suspend', 'switch', 'test',
    'threadlocal', 'try', 'union', 'unreachable', 'usingnamespace', 'var',
    'volatile', 'while',
})

ZIG_PRIMITIVES = frozenset({
    'anyerror', 'anyopaque', 'bool', 'c_char', 'c_int', 'c_long',
    'c_longdouble', 'c_longlong', 'c_short', 'c_uint', 'c_ulong',
    'c_ulonglong', 'c_ushort', 'comptime_float', 'comptime_int', 'f16',
    'f32', 'f64', 'f80', 'f128', 'false', 'isize', 'noreturn', 'null',
    'true', 'type', 'undefined', 'usize', 'void',
})

_IDENTIFIER = re.compile(r'[A-Za-z_][A-Za-z0-9_]*\Z')
_INT_TYPE = re.compile(r'[iu](0|[1-9][0-9]*)\Z')


def to_camel_case(name: str, word_sep: str) -> str:
    """Convert e.g. set_visible_child_name to setVisibleChildName"""
    words = name.split(word_sep)
    out = [words[0]]
    for word in words[1:]:
        if word:
            out.append(word[0].upper() + word[1:])
    return ''.join(out)


def to_pascal_case(name: str, word_sep: str) -> str:
    """Like to_camel_case, with the first character upper-cased"""
    camel = to_camel_case(name, word_sep)
    return camel[:1].upper() + camel[1:]


def is_valid_identifier(name: str) -> bool:
    """Check if name can be written as a bare Zig identifier"""
    if name == '_' or not _IDENTIFIER.match(name):
        return False
    if name in ZIG_KEYWORDS or name in ZIG_PRIMITIVES:
        return False
    return not _INT_TYPE.match(name)


def escape_identifier(name: str) -> str:
    """Quote name with @"..." when it is not a plain Zig identifier"""
    if is_valid_identifier(name):
        return name
    return f'@"{escape_string(name)}"'


def escape_string(value: str) -> str:
    """Escape value for use inside a Zig string literal"""
    out = []
    for byte in value.encode('utf-8'):
        char = chr(byte)
        if char == '\n':
            out.append('\\n')
        elif char == '\r':
            out.append('\\r')
        elif char == '\t':
            out.append('\\t')
        elif char == '\\':
            out.append('\\\\')
        elif char == '"':
            out.append('\\"')
        elif char == "'":
            out.append("\\'")
        elif 0x20 <= byte <= 0x7e:
            out.append(char)
        else:
            out.append(f'\\x{byte:02x}')
    return ''.join(out)
