import pytest

from chainevents.core.models import EventField, RenderedField
from chainevents.decoding.registry import add_many, add_renderer, make_renderer_registry, render_field, render_fields
from chainevents.decoding.renderers import as_bytes, render_bytes


@pytest.mark.parametrize(
    "value",
    ["0x48656c6c6f", "0X48656C6C6F", b"Hello", bytearray(b"Hello"), [72, 101, 108, 108, 111], "Hello"],
)
def test_bytes_field_decodes_to_text(value: object) -> None:
    rendered = render_field(EventField("Bytes", value), make_renderer_registry())
    assert rendered == RenderedField(type_tag="Bytes", text="Hello")


def test_bytes_field_strips_nul_padding() -> None:
    assert render_bytes(b"\x00\x00ticker\x00\x00") == "ticker"


def test_invalid_utf8_falls_back_to_hex() -> None:
    assert render_bytes(b"\xff\xfe\x00\x01") == "0xfffe0001"


def test_odd_length_hex_is_taken_as_text() -> None:
    assert as_bytes("0x123") == b"0x123"


@pytest.mark.parametrize("value,text", [([256, 1], "[256, 1]"), (["a", "b"], "['a', 'b']"), ((-1,), "(-1,)")])
def test_list_that_is_not_octets_renders_as_text(value: object, text: str) -> None:
    assert render_field(EventField("Bytes", value), make_renderer_registry()) == RenderedField("Bytes", text)


def test_multibyte_utf8() -> None:
    assert render_bytes("Grüße".encode()) == "Grüße"


@pytest.mark.parametrize(
    "field",
    [
        EventField("Balance", 1000),
        EventField("IdentityId", "0x0100"),
        EventField("bool", True),
        EventField("Vec<u8>", [1, 2]),
        EventField("Unknown", {"did": "0x01"}),
    ],
)
def test_other_fields_use_default_string_form(field: EventField) -> None:
    assert render_field(field, make_renderer_registry()).text == str(field.value)


def test_custom_renderer_is_dispatched_by_tag() -> None:
    registry = make_renderer_registry()
    add_renderer(registry, "Ticker", lambda v: str(v).upper())

    out = render_fields(
        [EventField("Ticker", "acme"), EventField("Bytes", b"memo"), EventField("u32", 7)],
        registry,
    )

    assert [f.text for f in out] == ["ACME", "memo", "7"]
    assert [f.type_tag for f in out] == ["Ticker", "Bytes", "u32"]


def test_add_many_registers_every_tag() -> None:
    registry = make_renderer_registry()
    add_many(registry, {"Moment": lambda v: f"{v} ms", "Balance": lambda v: f"{v / 1_000_000:.2f} POLYX"})

    fields = (EventField("Moment", 5), EventField("Balance", 2_500_000), EventField("Bytes", b"ok"))

    assert [f.text for f in render_fields(fields, registry)] == ["5 ms", "2.50 POLYX", "ok"]
