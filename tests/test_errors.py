from girgen.errors import (
    CyclicDependencyError, InvalidSchemaError, TranslationError,
)


def test_details_are_included_in_message():
    error = InvalidSchemaError("Malformed GIR document", {"path": "Gtk-4.0.gir"})
    assert str(error) == "Malformed GIR document (path=Gtk-4.0.gir)"
    assert str(TranslationError("varargs")) == "varargs"


def test_to_dict():
    error = CyclicDependencyError(["A-1.0.gir", "B-1.0.gir", "A-1.0.gir"])
    assert isinstance(error, TranslationError)
    assert error.to_dict() == {
        "error_type": "CyclicDependencyError",
        "message": "Cyclic repository dependency: A-1.0.gir -> B-1.0.gir -> A-1.0.gir",
        "details": {"cycle": ["A-1.0.gir", "B-1.0.gir", "A-1.0.gir"]},
    }
