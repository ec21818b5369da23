from __future__ import annotations

from mt940_reader.segment import (
    Field,
    detect_line_break,
    get_field,
    header,
    split_statements,
    split_transactions,
    tokenize,
)


TEXT = "\r\n".join(
    [
        "{1:F01TESTBANKAXXX}{4:",
        ":20:REF1",
        ":25:111",
        ":28C:1/1",
        ":61:1206070608D20,00NMSCNONREF",
        ":86:eerste regel",
        "tweede regel",
        ":86:los veld",
        ":61:1206080608C1,00NMSCNONREF",
        ":62F:C120608EUR1,00",
        "-}",
        "{1:F01TESTBANKAXXX}{4:",
        ":20:REF2",
        ":25:222",
        ":28C:2/1",
        ":62F:C120608EUR1,00",
        "-}",
    ]
)


def test_header_is_dropped_and_statements_split():
    chunks = split_statements(TEXT)

    assert len(chunks) == 2
    assert all(c.startswith(":20:") for c in chunks)
    assert header(TEXT) == "{1:F01TESTBANKAXXX}{4:\r\n"


def test_continuation_lines_keep_their_line_breaks():
    fields = tokenize(split_statements(TEXT)[0])

    assert [f.tag for f in fields] == ["20", "25", "28C", "61", "86", "86", "61", "62F"]
    assert fields[4] == Field(tag="86", content="eerste regel\r\ntweede regel")
    # el trailer '-}' y la cabecera siguiente no se pegan al último campo
    assert fields[-1].content == "C120608EUR1,00"


def test_get_field_takes_first_of_any_tag():
    fields = tokenize(split_statements(TEXT)[0])

    assert get_field(fields, "28", "28C") == "1/1"
    assert get_field(fields, "60F", "60M") is None


def test_transactions_group_following_descriptions():
    fields = tokenize(split_statements(TEXT)[0])
    chunks = split_transactions(fields, detect_line_break(TEXT))

    assert len(chunks) == 2
    assert chunks[0].description == "eerste regel\r\ntweede regel\r\nlos veld"
    assert chunks[1].line == "1206080608C1,00NMSCNONREF"
    assert chunks[1].description is None


def test_statement_without_transactions():
    fields = tokenize(split_statements(TEXT)[1])
    assert split_transactions(fields) == []


def test_plain_lf_input():
    text = ":20:X\n:25:1\n:61:1206070608D1,00NMSCNONREF\n:86:a\nb\n"
    fields = tokenize(split_statements(text)[0])
    chunks = split_transactions(fields, detect_line_break(text))

    assert detect_line_break(text) == "\n"
    assert chunks[0].description == "a\nb"
