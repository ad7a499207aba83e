"""Dependency Injection Container."""

from typing import Mapping

from injector import Injector, Module, provider, singleton

from ..codec import SduiCodec
from ..monitoring import MetricsCollector, metrics_collector
from ..runtime import (
    ActionDispatcher,
    ApiCaller,
    CustomHandler,
    DefaultActionDispatcher,
    DialogPresenter,
    FormSubmitter,
    HttpApiClient,
    Navigator,
    TaskScope,
)
from ..state import StateStore
from ..validation import ComponentValidator
from .config import Settings, get_settings


class SessionModule(Module):
    """Engine dependencies for one UI session."""

    def __init__(
        self,
        settings: Settings,
        *,
        navigate: Navigator | None = None,
        show_dialog: DialogPresenter | None = None,
        call_api: ApiCaller | None = None,
        submit_form: FormSubmitter | None = None,
        custom_handlers: Mapping[str, CustomHandler] | None = None,
        scope: TaskScope | None = None,
        metrics: MetricsCollector | None = None,
        codec: SduiCodec | None = None,
        validator: ComponentValidator | None = None,
    ) -> None:
        self.settings = settings
        self.navigate = navigate
        self.show_dialog = show_dialog
        self.call_api = call_api
        self.submit_form = submit_form
        self.custom_handlers = custom_handlers
        self.scope = scope
        self.metrics = metrics or metrics_collector
        self.codec = codec
        self.validator = validator

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_metrics(self) -> MetricsCollector:
        return self.metrics

    @singleton
    @provider
    def provide_codec(self, settings: Settings, metrics: MetricsCollector) -> SduiCodec:
        """Provide codec (reused when the host shares one between sessions)."""
        return self.codec or SduiCodec(settings=settings, metrics=metrics)

    @singleton
    @provider
    def provide_validator(self, metrics: MetricsCollector) -> ComponentValidator:
        return self.validator or ComponentValidator(metrics=metrics)

    @singleton
    @provider
    def provide_state_store(self) -> StateStore:
        """Provide the session's state store (never shared between containers)."""
        return StateStore()

    @singleton
    @provider
    def provide_dispatcher(
        self,
        store: StateStore,
        settings: Settings,
        metrics: MetricsCollector,
    ) -> DefaultActionDispatcher:
        """Provide dispatcher wired to the session store and collaborators (httpx by default)."""
        return DefaultActionDispatcher(
            store,
            navigate=self.navigate,
            show_dialog=self.show_dialog,
            call_api=self.call_api or HttpApiClient(settings=settings),
            submit_form=self.submit_form,
            custom_handlers=self.custom_handlers,
            scope=self.scope,
            settings=settings,
            metrics=metrics,
        )

    @singleton
    @provider
    def provide_action_dispatcher(self, dispatcher: DefaultActionDispatcher) -> ActionDispatcher:
        return dispatcher


def create_container(settings: Settings | None = None, **collaborators) -> Injector:
    """
    Create configured injector for one UI session.

    Args:
        settings: Engine settings (environment settings when omitted)
        **collaborators: Keyword arguments of :class:`SessionModule`

    Returns:
        Injector resolving SduiCodec, ComponentValidator, StateStore and
        ActionDispatcher
    """
    return Injector([SessionModule(settings or get_settings(), **collaborators)])
