import re
import textwrap

from girgen.types import (
    Alias, ArrayType, BitField, Callback, Class, Constant, Constructor, Enum, Field,
    Function, Interface, Member, Method, Name, Namespace, Parameter, Record,
    ReturnValue, Signal, Type, Union_,
)
from girgen.zig_generator import ZigGenerator


def simple(name, c_type=None):
    return Type(name=Name.parse(name), c_type=c_type)


def self_param(c_type):
    return Parameter(name="self", type=simple("Self", c_type), instance=True)


def render(ns: Namespace) -> str:
    return ZigGenerator(ns).generate()


def unescape_zig(literal: str) -> str:
    """Decode the body of a Zig string literal"""
    simple_escapes = {"n": b"\n", "r": b"\r", "t": b"\t", "\\": b"\\", '"': b'"', "'": b"'"}
    out = bytearray()
    i = 0
    while i < len(literal):
        char = literal[i]
        if char != "\\":
            out.extend(char.encode("utf-8"))
            i += 1
        elif literal[i + 1] == "x":
            out.append(int(literal[i + 2:i + 4], 16))
            i += 4
        else:
            out.extend(simple_escapes[literal[i + 1]])
            i += 2
    return out.decode("utf-8")


def test_class_with_parent():
    button = Class(
        name="Button",
        parent=Name(ns="Gtk", local="Widget"),
        constructors=[Constructor(
            name="new",
            c_identifier="gtk_button_new",
            return_value=ReturnValue(type=simple("Widget", "GtkWidget*")),
        )],
        methods=[Method(
            name="set_label",
            c_identifier="gtk_button_set_label",
            parameters=[
                self_param("GtkButton*"),
                Parameter(name="label", type=simple("utf8", "const char*")),
            ],
        )],
        signals=[Signal(name="clicked")],
    )
    expected = textwrap.dedent("""\
        pub const Button = extern struct {
            const Self = Button;

            extern fn gtk_button_new() callconv(.C) *Self;

            pub const new = gtk_button_new;


            pub usingnamespace ButtonMethods(Self);
        };

        pub fn ButtonMethods(comptime Self: type) type {
            return opaque {
                extern fn gtk_button_set_label(p_self: *Self, p_label: [*:0]const u8) callconv(.C) void;

                pub const setLabel = gtk_button_set_label;

                pub fn connectClicked(p_self: *Self, p_callback: *const fn (*Self, ?*anyopaque) callconv(.C) void, p_data: ?*anyopaque) c_ulong {
                    return gobject.signalConnectData(p_self, "clicked", @ptrCast(gobject.Callback, p_callback), p_data, null, .{});
                }

                pub fn asWidget(p_self: *Self) *Widget {
                    return @ptrCast(*Widget, p_self);
                }

                pub usingnamespace WidgetMethods(Self);
            };
        }

    """)
    assert render(Namespace(name="Gtk", classes=[button])) == expected


def test_child_class_includes_parent_capabilities_across_namespaces():
    header_bar = Class(name="HeaderBar", parent=Name(ns="Gtk", local="Widget"))
    output = render(Namespace(name="Adw", classes=[header_bar]))
    assert "        pub fn asWidget(p_self: *Self) *gtk.Widget {\n" in output
    assert "            return @ptrCast(*gtk.Widget, p_self);\n" in output
    assert "        pub usingnamespace gtk.WidgetMethods(Self);\n" in output
    assert "_ = Self;" not in output


def test_class_fields_functions_and_constants():
    obj = Class(
        name="Object",
        fields=[
            Field(name="g_type_instance", type=simple("TypeInstance", "GTypeInstance")),
            Field(name="ref_count", type=simple("guint", "guint")),
        ],
        functions=[Function(
            name="interface_list_properties",
            c_identifier="g_object_interface_list_properties",
            parameters=[Parameter(name="g_iface", type=simple("gpointer", "gpointer"))],
        )],
        constants=[Constant(name="MAGIC", type=simple("gint", "gint"), value="42")],
    )
    output = render(Namespace(name="GObject", classes=[obj]))
    assert output.startswith(textwrap.dedent("""\
        pub const Object = extern struct {
            const Self = Object;

            g_type_instance: TypeInstance,
            ref_count: c_uint,

            extern fn g_object_interface_list_properties(p_g_iface: ?*anyopaque) callconv(.C) void;

            pub const interfaceListProperties = g_object_interface_list_properties;


            pub const MAGIC: c_int = 42;


            pub usingnamespace ObjectMethods(Self);
        };

        pub fn ObjectMethods(comptime Self: type) type {
        _ = Self;
            return opaque {
            };
        }
    """))


def test_signal_inside_gobject_namespace_has_no_prefix():
    obj = Class(
        name="Object",
        signals=[Signal(
            name="notify",
            parameters=[Parameter(name="pspec", type=simple("ParamSpec", "GParamSpec*"))],
        )],
    )
    output = render(Namespace(name="GObject", classes=[obj]))
    assert (
        "        pub fn connectNotify(p_self: *Self, p_callback: *const fn (*Self, p_pspec: *ParamSpec, "
        "?*anyopaque) callconv(.C) void, p_data: ?*anyopaque) c_ulong {\n"
        '            return signalConnectData(p_self, "notify", @ptrCast(Callback, p_callback), '
        "p_data, null, .{});\n"
    ) in output


def test_signal_names_are_pascal_cased():
    iface = Interface(name="Editable", signals=[Signal(name="delete-text")])
    output = render(Namespace(name="Gtk", interfaces=[iface]))
    assert "pub fn connectDeleteText(" in output
    assert '"delete-text"' in output


def test_interface():
    iface = Interface(
        name="Orientable",
        methods=[Method(
            name="get_orientation",
            c_identifier="gtk_orientable_get_orientation",
            parameters=[self_param("GtkOrientable*")],
            return_value=ReturnValue(type=simple("Orientation", "GtkOrientation")),
        )],
    )
    expected = textwrap.dedent("""\
        pub const Orientable = opaque {
            const Self = Orientable;

            pub usingnamespace OrientableMethods(Self);
        };

        pub fn OrientableMethods(comptime Self: type) type {
            return opaque {
                extern fn gtk_orientable_get_orientation(p_self: *Self) callconv(.C) Orientation;

                pub const getOrientation = gtk_orientable_get_orientation;

            };
        }

    """)
    assert render(Namespace(name="Gtk", interfaces=[iface])) == expected


def test_record_declares_methods_inline():
    rect = Record(
        name="Rectangle",
        fields=[Field(name="x", type=simple("gint", "int"))],
        methods=[Method(
            name="equal",
            c_identifier="gdk_rectangle_equal",
            parameters=[
                self_param("const GdkRectangle*"),
                Parameter(name="rect2", type=simple("Rectangle", "const GdkRectangle*")),
            ],
            return_value=ReturnValue(type=simple("gboolean", "gboolean")),
        )],
    )
    expected = textwrap.dedent("""\
        pub const Rectangle = extern struct {
            const Self = Rectangle;

            x: c_int,

            extern fn gdk_rectangle_equal(p_self: *const Self, p_rect2: *const Rectangle) callconv(.C) bool;

            pub const equal = gdk_rectangle_equal;

        };

    """)
    assert render(Namespace(name="Gdk", records=[rect])) == expected


def test_union():
    union = Union_(
        name="Mutex",
        fields=[
            Field(name="p", type=simple("gpointer", "gpointer")),
            Field(name="i", type=ArrayType(element=simple("guint", "guint"), fixed_size=2)),
        ],
    )
    output = render(Namespace(name="GLib", unions=[union]))
    assert output == textwrap.dedent("""\
        pub const Mutex = extern union {
            const Self = Mutex;

            p: ?*anyopaque,
            i: [2]c_uint,

        };

    """)


def test_field_names_and_inline_callbacks():
    record = Record(
        name="SourceFuncs",
        fields=[
            Field(name="type", type=simple("gint", "gint")),
            Field(name="finalize", type=Callback(
                name="",
                parameters=[Parameter(name="source", type=simple("Source", "GSource*"))],
            )),
        ],
    )
    output = render(Namespace(name="GLib", records=[record]))
    assert '    @"type": c_int,\n' in output
    assert "    finalize: ?*const fn (p_source: *Source) callconv(.C) void,\n" in output


def test_enum():
    enum = Enum(
        name="Orientation",
        members=[Member(name="horizontal", value=0), Member(name="vertical", value=1)],
    )
    expected = textwrap.dedent("""\
        pub const Orientation = enum(i32) {
            horizontal = 0,
            vertical = 1,

            const Self = Orientation;
        };

    """)
    assert render(Namespace(name="Gtk", enums=[enum])) == expected


def test_enum_with_attached_functions_and_escaped_members():
    enum = Enum(
        name="EventType",
        members=[Member(name="2button_press", value=4), Member(name="error", value=5)],
        functions=[Function(
            name="get_type",
            c_identifier="gdk_event_type_get_type",
            return_value=ReturnValue(type=simple("GType", "GType")),
        )],
    )
    expected = textwrap.dedent("""\
        pub const EventType = enum(i32) {
            @"2button_press" = 4,
            @"error" = 5,

            const Self = EventType;

                extern fn gdk_event_type_get_type() callconv(.C) gobject.Type;

                pub const getType = gdk_event_type_get_type;

        };

    """)
    assert render(Namespace(name="Gdk", enums=[enum])) == expected


def test_enum_backing_width():
    small = Enum(name="Small", members=[Member(name="max", value=(1 << 31) - 1)])
    large = Enum(name="Large", members=[Member(name="max", value=1 << 31)])
    negative = Enum(name="Negative", members=[Member(name="min", value=-1)])
    output = render(Namespace(name="Test", enums=[small, large, negative]))
    assert "pub const Small = enum(i32) {" in output
    assert "pub const Large = enum(i64) {" in output
    assert "pub const Negative = enum(i32) {" in output


def test_bit_field():
    flags = BitField(
        name="StateFlags",
        members=[
            Member(name="normal", value=0),
            Member(name="active", value=1),
            Member(name="prelight", value=2),
        ],
    )
    expected = textwrap.dedent("""\
        pub const StateFlags = packed struct(i32) {
            active: bool = false,
            prelight: bool = false,
            _padding: u30 = 0,

            const Self = StateFlags;
        };

    """)
    assert render(Namespace(name="Gtk", bit_fields=[flags])) == expected


def test_bit_field_backing_width():
    flags = BitField(
        name="Wide",
        members=[Member(name="none", value=0), Member(name="high", value=1 << 31)],
    )
    output = render(Namespace(name="Test", bit_fields=[flags]))
    assert "pub const Wide = packed struct(i64) {" in output
    assert "    _padding: u63 = 0,\n" in output
    assert "none" not in output


def test_bit_field_without_padding():
    members = [Member(name=f"bit{i}", value=1 << i) for i in range(64)]
    output = render(Namespace(name="Test", bit_fields=[BitField(name="Full", members=members)]))
    assert "packed struct(i64)" in output
    assert "_padding" not in output
    assert output.count(": bool = false,") == 64


def test_function():
    function = Function(
        name="main_context_default",
        c_identifier="g_main_context_default",
        return_value=ReturnValue(type=simple("MainContext", "GMainContext*"), nullable=True),
    )
    expected = textwrap.dedent("""\
        extern fn g_main_context_default() callconv(.C) ?*MainContext;

        pub const mainContextDefault = g_main_context_default;

    """)
    assert render(Namespace(name="GLib", functions=[function])) == expected


def test_moved_declarations_are_skipped():
    moved = Function(name="old_api", c_identifier="g_old_api", moved_to="new_api")
    ctor = Constructor(name="new_old", c_identifier="g_thing_new_old", moved_to="Other.new")
    method = Method(
        name="old_method",
        c_identifier="g_thing_old_method",
        parameters=[self_param("GThing*")],
        moved_to="Thing.new_method",
    )
    thing = Record(name="Thing", constructors=[ctor], methods=[method])
    output = render(Namespace(name="GLib", records=[thing], functions=[moved]))
    assert "old" not in output


def test_constructor_return_type_is_overridden():
    ctor = Constructor(
        name="new_with_label",
        c_identifier="gtk_button_new_with_label",
        parameters=[Parameter(name="label", type=simple("utf8", "const char*"))],
        return_value=ReturnValue(type=simple("Widget", "GtkWidget*")),
    )
    output = render(Namespace(name="Gtk", records=[Record(name="Button", constructors=[ctor])]))
    assert (
        "    extern fn gtk_button_new_with_label(p_label: [*:0]const u8) callconv(.C) *Self;\n\n"
        "    pub const newWithLabel = gtk_button_new_with_label;\n"
    ) in output


def test_callbacks():
    callbacks = [
        Callback(
            name="SourceFunc",
            parameters=[Parameter(name="user_data", type=simple("gpointer", "gpointer"))],
            return_value=ReturnValue(type=simple("gboolean", "gboolean")),
        ),
        Callback(
            name="ClosureNotify",
            parameters=[
                Parameter(name="data", type=simple("gpointer", "gpointer")),
                Parameter(name="closure", type=simple("Closure", "GClosure*")),
            ],
        ),
    ]
    expected = textwrap.dedent("""\
        pub const SourceFunc = ?*const fn (p_user_data: ?*anyopaque) callconv(.C) bool;

        pub const ClosureNotify = ?*const fn (p_data: ?*anyopaque, p_closure: *anyopaque) callconv(.C) void;

    """)
    assert render(Namespace(name="GObject", callbacks=callbacks)) == expected


def test_nullable_callback_returns():
    widget = ReturnValue(type=simple("Widget", "GtkWidget*"), nullable=True)
    named = Callback(name="WidgetFactory", return_value=widget)
    record = Record(
        name="WidgetClass",
        fields=[Field(name="create", type=Callback(name="", return_value=widget))],
    )
    output = render(Namespace(name="Gtk", records=[record], callbacks=[named]))
    assert "pub const WidgetFactory = ?*const fn () callconv(.C) *Widget;\n" in output
    assert "    create: ?*const fn () callconv(.C) *Widget,\n" in output


def test_constants():
    constants = [
        Constant(name="MAJOR_VERSION", type=simple("gint", "gint"), value="4"),
        Constant(name="KEY_A", type=simple("gint", "gint"), value="65"),
        Constant(name="KEY_a", type=simple("gint", "gint"), value="97"),
        Constant(name="PRIORITY_NAME", type=simple("utf8", "gchar*"), value="high"),
    ]
    expected = textwrap.dedent("""\
        pub const MAJOR_VERSION: c_int = 4;

        pub const KEY_A: c_int = 65;

        pub const KEY_a: c_int = 97;

        pub const PRIORITY_NAME: [*:0]u8 = "high";

    """)
    assert render(Namespace(name="Gdk", constants=constants)) == expected


def test_string_constant_escaping_round_trips():
    value = 'say "hi"\\ now\né'
    constant = Constant(name="GREETING", type=simple("utf8", "gchar*"), value=value)
    output = render(Namespace(name="GLib", constants=[constant]))
    match = re.search(r'= "((?:[^"\\]|\\.)*)";', output)
    assert match is not None
    assert unescape_zig(match.group(1)) == value


def test_alias():
    alias = Alias(name="Pid", type=simple("gint", "int"))
    assert render(Namespace(name="GLib", aliases=[alias])) == "pub const Pid = c_int;\n\n"


def test_member_kind_order():
    ns = Namespace(
        name="Test",
        constants=[Constant(name="K", type=simple("gint", "gint"), value="1")],
        callbacks=[Callback(name="Cb")],
        functions=[Function(name="fn_a", c_identifier="test_fn_a")],
        bit_fields=[BitField(name="Flags")],
        enums=[Enum(name="En")],
        unions=[Union_(name="Un")],
        records=[Record(name="Rec")],
        interfaces=[Interface(name="Iface")],
        classes=[Class(name="Cls")],
        aliases=[Alias(name="Al", type=simple("gint", "gint"))],
    )
    output = render(ns)
    markers = [
        "pub const Al =", "pub const Cls =", "pub const Iface =", "pub const Rec =",
        "pub const Un =", "pub const En =", "pub const Flags =", "extern fn test_fn_a",
        "pub const Cb =", "pub const K:",
    ]
    positions = [output.index(marker) for marker in markers]
    assert positions == sorted(positions)


def test_header_lines_come_first():
    ns = Namespace(name="Gtk", aliases=[Alias(name="Al", type=simple("gint", "gint"))])
    output = ZigGenerator(ns).generate(['const gdk = @import("gdk.zig");', ""])
    assert output == 'const gdk = @import("gdk.zig");\n\npub const Al = c_int;\n\n'
