from __future__ import annotations

from django import template

from apps.injection import services
from apps.injection.compose.engine import engage

register = template.Library()


def _request(context):
    request = context.get("request")
    if request is None:
        raise template.TemplateSyntaxError(
            "hyperdrive tags need 'request' in the context "
            "(django.template.context_processors.request)."
        )
    return request


def _split_deps(deps):
    if not deps:
        return ()
    if isinstance(deps, str):
        return tuple(d.strip() for d in deps.split(",") if d.strip())
    return tuple(deps)


def _register(context, kind, handle, src, deps, ver, conditional, enqueue):
    services.register(
        _request(context),
        kind,
        handle,
        src,
        _split_deps(deps),
        ver or None,
        conditional=conditional or None,
        enqueue=bool(enqueue),
    )
    return ""


@register.simple_tag(takes_context=True)
def register_script(context, handle, src="", deps="", ver="", conditional="", enqueue=False):
    return _register(context, "script", handle, src, deps, ver, conditional, enqueue)


@register.simple_tag(takes_context=True)
def register_style(context, handle, src="", deps="", ver="", conditional="", enqueue=False):
    return _register(context, "style", handle, src, deps, ver, conditional, enqueue)


@register.simple_tag(takes_context=True)
def enqueue_script(context, *handles):
    services.enqueue_script(_request(context), *handles)
    return ""


@register.simple_tag(takes_context=True)
def enqueue_style(context, *handles):
    services.enqueue_style(_request(context), *handles)
    return ""


@register.simple_tag(takes_context=True)
def hyperdrive(context):
    """À placer dans <head>, après les enqueues et avant {% print_resources %}."""
    return engage(services.page_resources(_request(context)))


@register.simple_tag(takes_context=True)
def print_resources(context):
    return services.print_resources(services.page_resources(_request(context)))
