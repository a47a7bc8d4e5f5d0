from __future__ import annotations

import threading

import pytest

from typedforms.exceptions import FormDeclarationError
from typedforms.fields import field
from typedforms.forms import Form
from typedforms.registry import clear_field_cache, resolve_fields
from typedforms.types import integer, text


class Ordered(Form):
    @classmethod
    def declare_fields(cls):
        return (
            field("low", text(), order_key=-1),
            field("first", text()),
            field("high", text(), order_key=5),
            field("second", text()),
        )


class Extended(Ordered):
    @classmethod
    def declare_fields(cls):
        return (*super().declare_fields(), field("extra", integer()))


def test_fields_sort_by_descending_order_key_keeping_ties_stable() -> None:
    assert [spec.id for spec in resolve_fields(Ordered)] == ["high", "first", "second", "low"]


def test_fields_are_bound_to_their_form() -> None:
    assert all(spec.owner is Ordered for spec in resolve_fields(Ordered))
    assert all(spec.owner is Extended for spec in resolve_fields(Extended))
    assert [spec.id for spec in resolve_fields(Extended)] == ["high", "first", "second", "extra", "low"]


def test_fields_are_declared_once(mocker) -> None:
    spy = mocker.spy(Ordered, "declare_fields")

    first = resolve_fields(Ordered)
    second = resolve_fields(Ordered)

    assert first is second
    assert spy.call_count == 1


def test_clear_field_cache_forces_new_declaration(mocker) -> None:
    spy = mocker.spy(Ordered, "declare_fields")

    resolve_fields(Ordered)
    clear_field_cache()
    resolve_fields(Ordered)

    assert spy.call_count == 2


def test_concurrent_resolution_declares_once(mocker) -> None:
    spy = mocker.spy(Ordered, "declare_fields")
    results: list[tuple] = []

    threads = [threading.Thread(target=lambda: results.append(resolve_fields(Ordered))) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert spy.call_count == 1
    assert all(result is results[0] for result in results)


def test_duplicate_field_ids_are_rejected() -> None:
    class Duplicated(Form):
        @classmethod
        def declare_fields(cls):
            return (field("a", text()), field("a", integer()))

    with pytest.raises(FormDeclarationError, match="more than once"):
        resolve_fields(Duplicated)


def test_non_field_entries_are_rejected() -> None:
    class Broken(Form):
        @classmethod
        def declare_fields(cls):
            return ("a",)

    with pytest.raises(FormDeclarationError, match="non-field entry"):
        resolve_fields(Broken)


def test_blank_field_ids_are_rejected() -> None:
    class Blank(Form):
        @classmethod
        def declare_fields(cls):
            return (field(" ", text()),)

    with pytest.raises(FormDeclarationError, match="empty id"):
        resolve_fields(Blank)
