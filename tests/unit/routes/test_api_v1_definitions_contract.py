import pytest


def _assert_success_envelope(payload: object) -> dict:
    assert isinstance(payload, dict)
    assert payload.get("success") is True
    assert payload.get("error") is False
    assert "message" in payload
    assert "timestamp" in payload
    return payload


def _assert_error_envelope(payload: object, message_code: str) -> dict:
    assert isinstance(payload, dict)
    assert payload.get("success") is False
    assert payload.get("error") is True
    assert payload.get("message_code") == message_code
    assert "message" in payload
    return payload


_CUSTOM_FIELD = {
    "fieldName": "status",
    "fieldLabel": "Status",
    "dataType": "dropdown",
    "category": "general",
    "lovType": "user-defined",
    "lovItems": [
        {"code": "A", "shortName": "Alpha", "status": "Active"},
        {"code": "B", "shortName": "Beta", "status": "Inactive"},
    ],
}


@pytest.mark.unit
def test_api_v1_custom_fields_crud_contract(client) -> None:
    created = client.post("/api/v1/custom-fields", json=_CUSTOM_FIELD)
    assert created.status_code == 201
    data = _assert_success_envelope(created.get_json())["data"]
    assert {"id", "fieldName", "fieldLabel", "dataType", "category", "lovItems", "createdAt", "updatedAt"}.issubset(
        data.keys(),
    )
    field_id = data["id"]

    listed = client.get("/api/v1/custom-fields?search=stat")
    assert listed.status_code == 200
    assert [item["id"] for item in _assert_success_envelope(listed.get_json())["data"]] == [field_id]

    updated = client.put(f"/api/v1/custom-fields/{field_id}", json={"fieldLabel": "State"})
    assert updated.status_code == 200
    assert updated.get_json()["data"]["fieldLabel"] == "State"

    deleted = client.delete(f"/api/v1/custom-fields/{field_id}")
    assert deleted.status_code == 200
    assert deleted.get_json()["data"] == {"id": field_id}

    missing = client.get(f"/api/v1/custom-fields/{field_id}")
    assert missing.status_code == 404
    _assert_error_envelope(missing.get_json(), "RESOURCE_NOT_FOUND")


@pytest.mark.unit
def test_api_v1_custom_fields_duplicate_name_contract(client) -> None:
    assert client.post("/api/v1/custom-fields", json=_CUSTOM_FIELD).status_code == 201

    response = client.post("/api/v1/custom-fields", json=_CUSTOM_FIELD)

    assert response.status_code == 409
    payload = _assert_error_envelope(response.get_json(), "DUPLICATE_NAME")
    assert payload["extra"]["field"] == "fieldName"


@pytest.mark.unit
def test_api_v1_custom_fields_invalid_data_type_contract(client) -> None:
    response = client.post("/api/v1/custom-fields", json={**_CUSTOM_FIELD, "dataType": "signature"})

    assert response.status_code == 400
    payload = _assert_error_envelope(response.get_json(), "INVALID_ENUM")
    assert payload["extra"]["field"] == "dataType"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("override", "field"),
    [
        ({"lovType": ["api"]}, "lovType"),
        ({"lovType": {"kind": "api"}}, "lovType"),
        ({"lovItems": [{"code": "A", "shortName": "Alpha", "status": ["Active"]}]}, "lovItems.0.status"),
        ({"lovItems": [{"code": "A", "shortName": "Alpha", "status": {"value": "Active"}}]}, "lovItems.0.status"),
    ],
)
def test_api_v1_custom_fields_non_string_enum_contract(client, override, field) -> None:
    response = client.post("/api/v1/custom-fields", json={**_CUSTOM_FIELD, **override})

    assert response.status_code == 400
    payload = _assert_error_envelope(response.get_json(), "INVALID_ENUM")
    assert payload["extra"]["field"] == field
    assert client.get("/api/v1/custom-fields").get_json()["data"] == []


@pytest.mark.unit
def test_api_v1_custom_fields_missing_required_contract(client) -> None:
    response = client.post("/api/v1/custom-fields", json={"fieldName": "x"})

    assert response.status_code == 400
    payload = _assert_error_envelope(response.get_json(), "MISSING_REQUIRED_FIELDS")
    assert payload["extra"]["field"] == "fieldLabel"


@pytest.mark.unit
def test_api_v1_non_object_body_is_rejected(client) -> None:
    response = client.post("/api/v1/templates", json=["not", "an", "object"])

    assert response.status_code == 400
    _assert_error_envelope(response.get_json(), "JSON_REQUIRED")


@pytest.mark.unit
def test_api_v1_form_layouts_categories_contract(client) -> None:
    for name, category in (("A", "sales"), ("B", None), ("C", "crm"), ("D", "crm")):
        body = {"layoutName": name, "layoutType": "form-group", "category": category}
        assert client.post("/api/v1/form-layouts", json=body).status_code == 201

    categories = client.get("/api/v1/form-layouts/categories")
    listed = client.get("/api/v1/form-layouts")

    assert categories.status_code == 200
    assert _assert_success_envelope(categories.get_json())["data"] == ["crm", "sales"]
    assert len(listed.get_json()["data"]) == 4


@pytest.mark.unit
def test_api_v1_form_layouts_reject_grid_layout_on_create(client) -> None:
    response = client.post("/api/v1/form-layouts", json={"layoutName": "G", "layoutType": "grid-layout"})

    assert response.status_code == 400
    payload = _assert_error_envelope(response.get_json(), "INVALID_ENUM")
    assert payload["extra"]["field"] == "layoutType"


@pytest.mark.unit
def test_api_v1_templates_rename_conflict_contract(client) -> None:
    client.post("/api/v1/templates", json={"name": "Address", "category": "common"})
    phone = client.post("/api/v1/templates", json={"name": "Phone", "category": "common"}).get_json()["data"]

    response = client.put(f"/api/v1/templates/{phone['id']}", json={"name": "Address"})

    assert response.status_code == 409
    _assert_error_envelope(response.get_json(), "DUPLICATE_NAME")
    assert client.get(f"/api/v1/templates/{phone['id']}").get_json()["data"]["name"] == "Phone"


@pytest.mark.unit
def test_api_v1_templates_nested_table_is_rejected(client) -> None:
    body = {
        "name": "Grid",
        "category": "common",
        "fields": [
            {
                "id": "outer",
                "type": "table",
                "label": "Outer",
                "columns": [{"id": "inner", "type": "table", "label": "Inner", "columns": []}],
            },
        ],
    }

    response = client.post("/api/v1/templates", json=body)

    assert response.status_code == 400
    payload = _assert_error_envelope(response.get_json(), "FIELD_DEFINITION_INVALID")
    assert payload["extra"]["field"] == "fields.0.columns.0.type"


@pytest.mark.unit
def test_api_v1_forms_contract(client) -> None:
    client.post("/api/v1/custom-fields", json=_CUSTOM_FIELD)
    body = {
        "collectionName": "crm",
        "formName": "lead capture",
        "formJson": {
            "fields": [
                {"id": "stage", "type": "dropdown", "label": "Stage", "customFieldId": "status"},
                {"id": "name", "type": "text", "label": "Name"},
            ],
        },
    }

    created = client.post("/api/v1/forms", json=body)
    assert created.status_code == 201
    form = created.get_json()["data"]
    assert form["formName"] == "LEAD CAPTURE"
    assert form["styles"]["primaryColor"] == "#0ea5e9"

    duplicate = client.post("/api/v1/forms", json={**body, "formName": "Lead Capture"})
    assert duplicate.status_code == 409

    listed = client.get("/api/v1/forms?collection=crm").get_json()["data"]
    assert [item["formName"] for item in listed] == ["LEAD CAPTURE"]
    assert "fields" not in listed[0]

    options = client.get(f"/api/v1/forms/{form['id']}/options")
    assert options.status_code == 200
    assert options.get_json()["data"] == {"stage": [{"value": "A", "label": "Alpha"}]}

    with_inactive = client.get(f"/api/v1/forms/{form['id']}/options?includeInactive=true").get_json()["data"]
    assert [item["value"] for item in with_inactive["stage"]] == ["A", "B"]


@pytest.mark.unit
def test_api_v1_forms_categories_route_is_absent(client) -> None:
    assert client.get("/api/v1/forms/categories").status_code == 404
