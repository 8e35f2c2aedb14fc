from __future__ import annotations

import hashlib

import pytest
from sqlalchemy import inspect

import formloom.services.collections.namespace_provisioner as provisioner_module
from formloom import db
from formloom.services.collections.namespace_provisioner import NamespaceProvisioner, build_table_name


def _digest(name: str) -> str:
    return hashlib.sha1(name.encode("utf-8")).hexdigest()[:8]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("contacts", "ns_contacts"),
        ("sales_leads_2024", "ns_sales_leads_2024"),
        ("Contacts", f"ns_contacts_{_digest('Contacts')}"),
        ("Sales Leads 2024", f"ns_sales_leads_2024_{_digest('Sales Leads 2024')}"),
        ("--weird//name--", f"ns_weird_name_{_digest('--weird//name--')}"),
        ("!!!", ""),
    ],
)
def test_build_table_name(name: str, expected: str) -> None:
    assert build_table_name("ns_", name) == expected


@pytest.mark.unit
def test_build_table_name_is_truncated_with_digest() -> None:
    table_name = build_table_name("ns_", "x" * 200)

    assert len(table_name) <= 63
    assert table_name.endswith(f"_{_digest('x' * 200)}")
    assert build_table_name("ns_", "x" * 201) != table_name


@pytest.mark.unit
@pytest.mark.parametrize(
    "names",
    [("My Coll", "my_coll"), ("Contacts", "contacts"), ("a-b", "a b"), ("y" * 70, "y" * 71)],
)
def test_build_table_name_keeps_distinct_names_apart(names: tuple[str, str]) -> None:
    first, second = names

    assert build_table_name("ns_", first) != build_table_name("ns_", second)


@pytest.mark.unit
def test_colliding_collection_names_get_separate_tables(app_context) -> None:
    provisioner = NamespaceProvisioner()

    first = provisioner.create_namespace("my_coll")
    second = provisioner.create_namespace("My Coll")

    assert first.status == "created"
    assert second.status == "created"
    assert first.message != second.message
    table_names = inspect(db.engine).get_table_names()
    assert first.message in table_names
    assert second.message in table_names


@pytest.mark.unit
def test_create_namespace_creates_table_then_reports_exists(app_context) -> None:
    provisioner = NamespaceProvisioner()

    first = provisioner.create_namespace("contacts")
    second = provisioner.create_namespace("contacts")

    assert first.status == "created"
    assert first.message == "ns_contacts"
    assert second.status == "exists"
    assert "ns_contacts" in inspect(db.engine).get_table_names()


@pytest.mark.unit
def test_create_namespace_is_skipped_when_disabled(app_context) -> None:
    outcome = NamespaceProvisioner(enabled=False).create_namespace("contacts")

    assert outcome.status == "skipped"
    assert "ns_contacts" not in inspect(db.engine).get_table_names()


@pytest.mark.unit
def test_create_namespace_reads_flags_from_config(app_context) -> None:
    app_context.config["NAMESPACE_PROVISIONING_ENABLED"] = False

    assert NamespaceProvisioner().create_namespace("contacts").status == "skipped"


@pytest.mark.unit
def test_create_namespace_fails_softly_for_unusable_name(app_context, monkeypatch) -> None:
    warnings: list[str] = []
    monkeypatch.setattr(provisioner_module, "log_warning", lambda message, **_: warnings.append(message))

    outcome = NamespaceProvisioner().create_namespace("???")

    assert outcome.status == "failed"
    assert warnings == ["集合名称无法转换为表名"]


@pytest.mark.unit
def test_create_namespace_uses_configured_prefix(app_context) -> None:
    outcome = NamespaceProvisioner(table_prefix="data_").create_namespace("leads")

    assert outcome.status == "created"
    assert outcome.message == "data_leads"
