from .context import LocaleContext, resolve_locale_context

__all__ = ["LocaleContext", "resolve_locale_context"]
