import pytest

from mcpcore.content import Annotations
from mcpcore.protocol import Role
from mcpcore.resources import (
    new_resource,
    new_resource_template,
    with_annotations,
    with_mime_type,
    with_resource_description,
    with_template_annotations,
    with_template_description,
    with_template_mime_type,
)


def test_new_resource_without_options():
    resource = new_resource("test://resource", "Test Resource")
    assert resource.uri == "test://resource"
    assert resource.name == "Test Resource"
    assert resource.description == ""
    assert resource.annotations is None


def test_new_resource_applies_options():
    resource = new_resource(
        "test://resource",
        "Test Resource",
        with_resource_description("A test resource"),
        with_mime_type("text/plain"),
        with_annotations([Role.USER], 1.0),
    )
    assert resource.description == "A test resource"
    assert resource.mime_type == "text/plain"
    assert resource.annotations == Annotations(audience=[Role.USER], priority=1.0)


def test_options_apply_in_order():
    resource = new_resource(
        "test://r", "r", with_resource_description("first"), with_resource_description("second")
    )
    assert resource.description == "second"


def test_annotations_option_reuses_existing_object():
    resource = new_resource("test://r", "r", with_annotations([Role.USER], 0.2))
    existing = resource.annotations
    with_annotations([Role.ASSISTANT], 0.8)(resource)
    assert resource.annotations is existing
    assert resource.annotations.audience == [Role.ASSISTANT]
    assert resource.annotations.priority == 0.8


def test_new_resource_template_applies_options():
    template = new_resource_template(
        "test://{id}",
        "Items",
        with_template_description("All items"),
        with_template_mime_type("application/json"),
        with_template_annotations([Role.ASSISTANT], 0.5),
    )
    assert template.uri_template.raw() == "test://{id}"
    assert template.name == "Items"
    assert template.description == "All items"
    assert template.mime_type == "application/json"
    assert template.annotations.audience == [Role.ASSISTANT]
    assert template.to_dict()["uriTemplate"] == "test://{id}"


def test_new_resource_template_rejects_invalid_template():
    with pytest.raises(ValueError):
        new_resource_template("test://{id", "Broken")


def test_resource_dict_reflects_options():
    resource = new_resource("test://r", "r", with_mime_type("text/plain"))
    assert resource.to_dict() == {"uri": "test://r", "name": "r", "mimeType": "text/plain"}