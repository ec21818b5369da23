from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from mt940_reader.banks.abn_amro import AbnAmro
from mt940_reader.banks.bnp import Bnp
from mt940_reader.banks.caixabank import CaixaBank, derive_account_iban
from mt940_reader.banks.german import Commerzbank, DeutscheBank, structured_fields
from mt940_reader.banks.ing import Ing
from mt940_reader.banks.sns import Sns
from mt940_reader.errors import MalformedTransactionLineError
from mt940_reader.reader import Reader


def _reconcile(statement) -> None:
    """Saldo inicial + movimientos == saldo final."""
    total = sum((t.amount for t in statement.transactions), Decimal("0"))
    assert statement.opening_balance.amount + total == statement.closing_balance.amount, (
        f"Reconciliación falló: opening={statement.opening_balance.amount} "
        f"sum={total} closing={statement.closing_balance.amount}"
    )


@pytest.mark.parametrize(
    "fixture, dialect",
    [
        ("abn_amro.txt", AbnAmro),
        ("ing.txt", Ing),
        ("sns.txt", Sns),
        ("deutsche_bank.txt", DeutscheBank),
        ("commerzbank.txt", Commerzbank),
        ("bnp.txt", Bnp),
        ("caixabank.txt", CaixaBank),
    ],
)
def test_only_the_right_dialect_accepts(load_document, fixture, dialect):
    text = load_document(fixture)
    accepted = [name for name, d in Reader.get_default_dialects().items() if d().accept(text)]

    assert accepted == [name for name, d in Reader.get_default_dialects().items() if d is dialect]


# --- Sns ---


def test_sns(load_document):
    statements = Reader().decode(load_document("sns.txt"))
    assert len(statements) == 2

    statement = statements[0]
    assert statement.number == "160/1"
    assert statement.account.number == "123456789"

    opening = statement.opening_balance
    assert opening.date == datetime.date(2012, 6, 8)
    assert opening.currency == "EUR"
    assert opening.amount == Decimal("1234.56")
    assert statement.closing_balance.amount == Decimal("1209.56")
    _reconcile(statement)

    tx = statement.transactions[0]
    assert tx.value_date == datetime.date(2012, 6, 7)
    assert tx.book_date == datetime.date(2012, 6, 8)
    assert tx.amount == Decimal("-20.00")
    assert tx.description == "0987654321 marechal s\r\n          \r\ndit is een test"
    assert tx.contra_account.number == "987654321"
    assert tx.contra_account.name == "marechal s"

    assert statement.transactions[1].contra_account is None


def test_sns_statement_without_transactions(load_document):
    statements = Reader().decode(load_document("sns.txt"))
    assert len(statements[1].transactions) == 0
    assert statements[1].closing_balance is not None


def test_malformed_transaction_aborts_everything(load_document):
    text = load_document("sns.txt").replace(":61:1206080608D5,00", ":61:12X6080608D5,00")

    with pytest.raises(MalformedTransactionLineError):
        Reader().decode(text)


# --- BNP ---


def test_bnp(load_document):
    statement = Reader().decode(load_document("bnp.txt"))[0]
    _reconcile(statement)

    tx = statement.transactions[0]
    assert tx.amount == Decimal("1234.56")
    assert tx.value_date == datetime.date(2016, 1, 4)
    assert tx.book_date == datetime.date(2015, 12, 28)
    assert tx.code == "02"
    assert tx.ref == "E2E-REF-1"
    assert tx.eref == "E2E-REF-1"
    assert tx.bank_ref == "CAIXESBBXXX"
    assert tx.bic == "CAIXESBBXXX"
    assert tx.iban == "VIRT0001"
    assert tx.tx_text == "TRANSFERENCIA"
    assert tx.purpose == "FACTURA 2015-123"
    assert tx.account_holder == "ACME SL"
    assert tx.contra_account.number == "ES7620770024003102575766"
    assert tx.contra_account.name == "ACME SL"
    assert tx.supplementary_details == "1601041228C1234,56NTRFNONREF//0401"
    assert "\r\n" not in tx.description
    assert not tx.description.endswith("/")


def test_bnp_missing_subfields_are_empty(load_document):
    tx = Reader().decode(load_document("bnp.txt"))[0].transactions[1]

    assert tx.amount == Decimal("-20.00")
    assert tx.code == "17"
    assert tx.ref == ""
    assert tx.iban == ""
    assert tx.contra_account is None


# --- CaixaBank ---


def test_caixabank_derives_iban_from_legacy_account(load_document):
    statement = Reader().decode(load_document("caixabank.txt"))[0]

    assert statement.account.number == "ES9121000418450200051332"
    assert statement.opening_balance.date == datetime.date(2015, 12, 31)
    assert statement.transactions[0].amount == Decimal("-30.50")
    _reconcile(statement)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0418/0200051332", "ES9121000418450200051332"),
        ("2077 0024 3102575766", "ES7620770024003102575766"),
        ("20770024003102575766", "ES7620770024003102575766"),
        ("ES91 2100 0418 4502 0005 1332", "ES9121000418450200051332"),
        ("CUENTA-X", "CUENTA-X"),
    ],
)
def test_derive_account_iban(raw, expected):
    assert derive_account_iban(raw) == expected


# --- ABN AMRO ---


def test_abn_amro(load_document):
    statement = Reader().decode(load_document("abn_amro.txt"))[0]
    assert statement.number == "19321/1"
    assert statement.account.number == "517852257"
    _reconcile(statement)

    legacy, sepa, dotted = statement.transactions
    assert legacy.contra_account.number == "428428"
    assert legacy.description.startswith("GIRO   428428 KPN")
    assert legacy.description.endswith("INCL. 1,44 BTW")

    assert sepa.book_date == datetime.date(2011, 5, 23)
    assert sepa.contra_account.number == "NL46ABNA0499998748"
    assert sepa.contra_account.name == "MR J DOE"
    assert sepa.description == "Factuur 2011-12"
    assert sepa.tx_text == "SEPA OVERBOEKING"
    assert sepa.bic == "ABNANL2A"
    assert sepa.eref == "NOTPROVIDED"

    assert dotted.contra_account.number == "123456789"
    assert dotted.contra_account.name == "GEMEENTE AMSTERDAM"
    assert dotted.description == "12.34.56.789 GEMEENTE AMSTERDAM\r\nOZB 2011"


# --- ING ---


def test_ing(load_document):
    statement = Reader().decode(load_document("ing.txt"))[0]
    assert statement.account.number == "NL69INGB0123456789EUR"
    _reconcile(statement)

    tx = statement.transactions[0]
    assert tx.amount == Decimal("1.56")
    assert tx.ref == "EREF"
    assert tx.bank_ref == "00000000001005"
    assert tx.eref == "EV12341REP1231456T1234"
    assert tx.contra_account.number == "NL32INGB0000012345"
    assert tx.contra_account.name == "ING BANK NV INZAKE WEB"
    assert tx.bic == "INGBNL2A"
    assert tx.description == "EV10001REP1000000T1000"


def test_ing_structured_remittance(load_document):
    tx = Reader().decode(load_document("ing.txt"))[0].transactions[1]

    assert tx.amount == Decimal("-12.50")
    assert tx.eref == "INV-2014-07"
    assert tx.contra_account.number == "NL08INGB0000054321"
    assert tx.contra_account.name == "ENERGIE BV"
    # STRD/CUR/ se quita igual que USTD//
    assert tx.description == "1234567890123456"
    assert tx.purpose == "1234567890123456"


# --- Deutsche Bank ---


def test_deutsche_bank(load_document):
    statement = Reader().decode(load_document("deutsche_bank.txt"))[0]
    assert statement.account.number == "10070000/1234567"
    _reconcile(statement)

    tx = statement.transactions[0]
    assert tx.amount == Decimal("-89.90")
    assert tx.ext_code == "105"
    assert tx.tx_text == "SEPA-LASTSCHRIFT"
    assert tx.primanota == "9310"
    assert tx.eref == "RG2023-0042"
    assert tx.mref == "M-778899"
    assert tx.creditor_id == "DE98ZZZ09999999999"
    assert tx.purpose == "Stromrechnung Maerz"
    assert tx.description == "Stromrechnung Maerz"
    assert tx.bic == "COBADEFFXXX"
    assert tx.contra_account.number == "DE89370400440532013000"
    assert tx.contra_account.name == "Stadtwerke Musterstadt GmbH"


# --- Commerzbank ---


def test_commerzbank(load_document):
    statement = Reader().decode(load_document("commerzbank.txt"))[0]
    assert statement.account.number == "37040044/0532013000"
    assert statement.number == "00007/001"
    _reconcile(statement)

    tx = statement.transactions[0]
    assert tx.amount == Decimal("1200.00")
    assert tx.ext_code == "166"
    assert tx.tx_text == "SEPA-GUTSCHRIFT"
    assert tx.primanota == "9249"
    assert tx.eref == "NOTPROVIDED"
    assert tx.description == "Miete April"
    assert tx.bic == "GENODEF1S04"
    assert tx.contra_account.number == "DE02120300000000202051"
    assert tx.contra_account.name == "Max Mustermann"


def test_german_free_text_has_no_transaction_code(load_document):
    tx = Reader().decode(load_document("commerzbank.txt"))[0].transactions[1]

    assert tx.amount == Decimal("-45.00")
    assert tx.ext_code == ""
    assert tx.tx_text == ""
    assert tx.description == "Kontofuehrung"
    assert tx.contra_account is None


@pytest.mark.parametrize(
    "description, gvc",
    [
        ("105?00SEPA-LASTSCHRIFT", "105"),
        ("Gutschrift Miete", ""),
        ("123 sin subcampos", ""),
        ("ABC?00texto", ""),
    ],
)
def test_structured_fields_gvc(description, gvc):
    assert structured_fields(description)["gvc"] == gvc
