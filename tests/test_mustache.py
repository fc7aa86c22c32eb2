from __future__ import annotations

from types import SimpleNamespace

from tagsmith.core.diagnostics import RecordingEmitter
from tagsmith.core.events import CloseTag, OpenTag, Text
from tagsmith.core.mustache import interpolate_event, replace_mustaches


def test_replace_mustaches_with_scope() -> None:
    emitter = RecordingEmitter()
    scope = {"title": "Hello", "card": {"tone": "warm"}, "user": SimpleNamespace(name="Ada")}
    text = "{{ title }} / {{card.tone}} / {{ user.name }}"

    assert replace_mustaches(text, scope, emitter=emitter) == "Hello / warm / Ada"
    assert not emitter.warnings


def test_replace_mustaches_formats_special_values() -> None:
    scope = {"none": None, "yes": True, "no": False, "count": 3}

    assert replace_mustaches("[{{none}}|{{yes}}|{{no}}|{{count}}]", scope) == "[|true|false|3]"


def test_replace_mustaches_missing_value_warns() -> None:
    emitter = RecordingEmitter()

    result = replace_mustaches("Intro {{title}}", {}, emitter=emitter, source="pl:card")

    assert result == "Intro {{title}}"
    assert emitter.warnings and "pl:card" in emitter.warnings[0]
    assert emitter.events == [("unresolved_placeholder", {"placeholder": "title", "source": "pl:card"})]


def test_private_attributes_are_not_resolved() -> None:
    scope = {"obj": SimpleNamespace(_secret="x")}

    assert replace_mustaches("{{ obj._secret }}", scope) == "{{ obj._secret }}"


def test_interpolate_event_preserves_identity_without_placeholders() -> None:
    text = Text("plain")
    tag = OpenTag("a", {"href": "/"})
    close = CloseTag("a")

    assert interpolate_event(text, {}) is text
    assert interpolate_event(tag, {}) is tag
    assert interpolate_event(close, {}) is close


def test_interpolate_event_rewrites_text_and_attributes() -> None:
    tag = OpenTag("a", {"href": "/users/{{ id }}", "hidden": None})

    updated = interpolate_event(tag, {"id": 7})

    assert isinstance(updated, OpenTag)
    assert dict(updated.attributes) == {"href": "/users/7", "hidden": None}
    assert interpolate_event(Text("#{{ id }}"), {"id": 7}).content == "#7"  # type: ignore[union-attr]
    raw = Text("{{ id }}", raw=True)
    assert interpolate_event(raw, {"id": 7}) is raw
