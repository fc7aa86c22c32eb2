from __future__ import annotations

import pytest

from tagsmith.core.dialect import ComponentDialect
from tagsmith.core.events import OpenTag, StandaloneTag
from tagsmith.core.exceptions import RegistrationError


def test_add_component_is_chainable() -> None:
    dialect = ComponentDialect().add_component("simple").add_component("Card", "widgets/card")

    assert len(dialect) == 2
    assert "card" in dialect
    assert dialect.registrations() == [("simple", "pl/simple/simple"), ("card", "widgets/card")]
    assert [processor.element_complete_name for processor in dialect] == ["pl:simple", "pl:card"]


def test_processor_lookup_accepts_colon_and_hyphen_forms() -> None:
    dialect = ComponentDialect().add_component("simple")

    assert dialect.processor_for(StandaloneTag("pl:simple")) is not None
    assert dialect.processor_for(OpenTag("PL:Simple")) is not None
    assert dialect.processor_for(OpenTag("pl-simple")) is not None
    assert dialect.processor_for(OpenTag("pl:other")) is None
    assert dialect.processor_for(OpenTag("simple")) is None
    assert dialect.processor_for(OpenTag("ui:simple")) is None


def test_registration_errors() -> None:
    dialect = ComponentDialect().add_component("simple")

    with pytest.raises(RegistrationError):
        dialect.add_component("simple")
    with pytest.raises(RegistrationError):
        dialect.add_component("slot")
    with pytest.raises(RegistrationError):
        dialect.add_component("block")
    with pytest.raises(RegistrationError):
        dialect.add_component(" ")
    with pytest.raises(RegistrationError):
        ComponentDialect("")
    with pytest.raises(RegistrationError):
        ComponentDialect("a:b")
