"""Builders for resources and resource templates using option callables."""

from __future__ import annotations

from typing import Callable, Sequence

from .content import Annotations, Resource, ResourceTemplate, URITemplate
from .protocol import Role

ResourceOption = Callable[[Resource], None]
ResourceTemplateOption = Callable[[ResourceTemplate], None]


def new_resource(uri: str, name: str, *opts: ResourceOption) -> Resource:
    """Create a resource and apply the options in order."""
    resource = Resource(uri=uri, name=name)
    for opt in opts:
        opt(resource)
    return resource


def with_resource_description(description: str) -> ResourceOption:
    """Set the resource's description."""

    def apply(resource: Resource) -> None:
        resource.description = description

    return apply


def with_mime_type(mime_type: str) -> ResourceOption:
    """Set the resource's MIME type."""

    def apply(resource: Resource) -> None:
        resource.mime_type = mime_type

    return apply


def with_annotations(audience: Sequence[Role], priority: float) -> ResourceOption:
    """Set the resource's audience and priority annotations."""

    def apply(resource: Resource) -> None:
        if resource.annotations is None:
            resource.annotations = Annotations()
        resource.annotations.audience = list(audience)
        resource.annotations.priority = priority

    return apply


def new_resource_template(
    uri_template: str, name: str, *opts: ResourceTemplateOption
) -> ResourceTemplate:
    """Create a resource template; raises ValueError on an invalid URI template."""
    template = ResourceTemplate(uri_template=URITemplate(uri_template), name=name)
    for opt in opts:
        opt(template)
    return template


def with_template_description(description: str) -> ResourceTemplateOption:
    """Set the template's description."""

    def apply(template: ResourceTemplate) -> None:
        template.description = description

    return apply


def with_template_mime_type(mime_type: str) -> ResourceTemplateOption:
    """Set the MIME type shared by all resources matching the template."""

    def apply(template: ResourceTemplate) -> None:
        template.mime_type = mime_type

    return apply


def with_template_annotations(audience: Sequence[Role], priority: float) -> ResourceTemplateOption:
    """Set the template's audience and priority annotations."""

    def apply(template: ResourceTemplate) -> None:
        if template.annotations is None:
            template.annotations = Annotations()
        template.annotations.audience = list(audience)
        template.annotations.priority = priority

    return apply