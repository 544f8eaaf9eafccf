from __future__ import annotations

import pytest

ABN_AMRO_STATEMENT = "\r\n".join(
    [
        "ABNANL2A",
        "940",
        "ABNANL2A",
        ":20:ABN AMRO BANK NV",
        ":25:517852257",
        ":28:19321/1",
        ":60F:C110522EUR3236,28",
        ":61:1105240525D9,00N192NONREF",
        ":86:GIRO   428428 KPN - DIGITENNE    BETALINGSKENM.  000000042188659",
        "5314606715                       BETREFT FACTUUR D.D. 20-05-2011",
        "INCL. 1,44 BTW",
        ":61:1105210523D10,00N426NONREF",
        ":86:/TRTP/SEPA OVERBOEKING/IBAN/NL44RABO0123456789/BIC/RABONL2U",
        "/NAME/J. JANSEN/REMI/Factuur 2011-001/EREF/NOTPROVIDED",
        ":61:1105220522D25,03N426NONREF",
        ":86:SEPA INCASSO ALGEMEEN DOORLOPEND INCASSANT: NL12ZZZ123456780000",
        "NAAM: ENECO  MACHTIGING: 1234567  OMSCHRIJVING: Termijnbedrag juni",
        "IBAN: NL20INGB0001234567  KENMERK: 20130601-0001",
        ":62F:C110525EUR3201,25",
        "-",
        "",
    ]
)


@pytest.fixture
def abn_amro_statement() -> str:
    return ABN_AMRO_STATEMENT
