"""Action Dispatcher.

Interprets actions and performs their side effects through injected
collaborators. Every asynchronous action is written to the state store as a
short linear sequence (loading flag, then result or error keys, then any
chained action) so a host can follow progress by observing keys alone.

``dispatch`` never raises: collaborator failures are logged and, where a key
is defined for them, recorded in the store.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Coroutine, Mapping

from returns.result import Failure

from ..core import LogContext, Settings, get_logger, get_settings, safe_json_dumps
from ..models import (
    Action,
    ApiCallAction,
    CustomAction,
    NavigateAction,
    ResetAction,
    ShowDialogAction,
    UpdateStateAction,
)
from ..monitoring import MetricsCollector, metrics_collector
from ..state import IntValue, MapValue, StateStore, StateValue, StringValue
from .chained import parse_chained_action
from .collaborators import (
    ApiCaller,
    ApiResponse,
    CustomHandler,
    DialogPresenter,
    FormSubmitter,
    Navigator,
    TaskScope,
)

logger = get_logger(__name__)


# State keys written by the dispatcher
IS_LOADING = "isLoading"
API_STATUS = "apiStatus"
LAST_API_RESPONSE = "lastApiResponse"
LAST_API_ERROR = "lastApiError"
LAST_CUSTOM_ACTION = "lastCustomAction"
CUSTOM_ACTION_DATA = "customActionData"
LAST_CUSTOM_ACTION_ERROR = "lastCustomActionError"
IS_SUBMITTING = "isSubmitting"
FORM_DATA = "formData"
FORM_SUBMISSION_STATUS = "formSubmissionStatus"
FORM_SUBMISSION_ERROR = "formSubmissionError"
LAST_FORM_SUBMISSION = "lastFormSubmission"

UNKNOWN_ERROR = "Unknown error"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _message(error: Any) -> str:
    return str(error) or type(error).__name__ or UNKNOWN_ERROR


class DispatchPhase(str, Enum):
    """Where the dispatcher is in handling the current action."""

    IDLE = "idle"
    DISPATCHING = "dispatching"
    NAVIGATING = "navigating"
    CALLING = "calling"
    SHOWING_DIALOG = "showing_dialog"
    MUTATING = "mutating"
    RESETTING = "resetting"
    INVOKING = "invoking"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class Transition:
    phase: DispatchPhase
    action_type: str
    timestamp: int = field(default_factory=_now_ms)


class ActionDispatcher(ABC):
    """Entry point a host renderer calls when a node's action fires."""

    @abstractmethod
    def dispatch(self, action: Action) -> None:
        """Handle one action. Must not raise."""

    def dispatch_string(self, text: str) -> None:
        """Dispatch a ``verb:payload`` chained action; malformed strings are dropped."""
        action = parse_chained_action(text)
        if action is not None:
            self.dispatch(action)

    def __call__(self, action: Action) -> None:
        self.dispatch(action)


class NullActionDispatcher(ActionDispatcher):
    """Ignores every action (previews, tests)."""

    def dispatch(self, action: Action) -> None:
        pass


class LoggingActionDispatcher(ActionDispatcher):
    """Logs every action without performing it."""

    def dispatch(self, action: Action) -> None:
        logger.info("action_logged", action_type=action.type, action=action.to_wire())


class DefaultActionDispatcher(ActionDispatcher):
    """
    Dispatcher backed by a session state store and injected collaborators.

    ApiCall and form submission run as tasks on ``scope`` (an
    ``asyncio.TaskGroup``, an event loop, or anything with ``create_task``).
    Without a scope both are no-ops. A missing collaborator is logged and the
    corresponding effect is skipped.
    """

    def __init__(
        self,
        store: StateStore,
        *,
        navigate: Navigator | None = None,
        show_dialog: DialogPresenter | None = None,
        call_api: ApiCaller | None = None,
        submit_form: FormSubmitter | None = None,
        custom_handlers: Mapping[str, CustomHandler] | None = None,
        scope: TaskScope | None = None,
        settings: Settings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.store = store
        self.settings = settings or get_settings()
        self.metrics = metrics or metrics_collector
        self.scope = scope

        self._navigate = navigate
        self._show_dialog = show_dialog
        self._call_api = call_api
        self._submit_form = submit_form
        self._custom_handlers: dict[str, CustomHandler] = dict(custom_handlers or {})

        self._phase = DispatchPhase.IDLE
        self._transitions: deque[Transition] = deque(maxlen=self.settings.dispatch_history_size)
        self._pending: set[asyncio.Future[Any]] = set()

        self._handlers: dict[type, Callable[[Any], None]] = {
            NavigateAction: self._handle_navigate,
            ApiCallAction: self._handle_api_call,
            ShowDialogAction: self._handle_show_dialog,
            UpdateStateAction: self._handle_update_state,
            ResetAction: self._handle_reset,
            CustomAction: self._handle_custom,
        }

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def phase(self) -> DispatchPhase:
        return self._phase

    @property
    def transitions(self) -> list[Transition]:
        """Most recent phase changes, oldest first."""
        return list(self._transitions)

    @property
    def pending(self) -> int:
        """Number of in-flight asynchronous operations."""
        return len(self._pending)

    def register_handler(self, name: str, handler: CustomHandler) -> None:
        self._custom_handlers[name] = handler

    async def join(self) -> None:
        """Wait until every in-flight ApiCall and submission has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, action: Action) -> None:
        action_type = getattr(action, "type", type(action).__name__)
        with LogContext(action_type=action_type):
            self._enter(DispatchPhase.DISPATCHING, action_type)
            status = "ok"
            try:
                handler = self._handlers.get(type(action))
                if handler is None:
                    logger.warning("action_unsupported", action=repr(action))
                    status = "ignored"
                else:
                    handler(action)
            except Exception as e:
                status = "error"
                logger.error("action_failed", error=str(e), exc_info=True)
                self.metrics.record_error(type(e).__name__, "dispatcher")
            finally:
                self._enter(DispatchPhase.IDLE, action_type)
            self.metrics.record_action(action_type, status)

    def submit_form(self, data: Mapping[str, Any]) -> None:
        """
        Submit form data through the injected submitter.

        Follows the ApiCall shape: ``isSubmitting`` first, then the status
        keys once the submitter finishes. Never raises.
        """
        with LogContext(action_type="submit_form"):
            if self.scope is None:
                logger.info("submit_skipped", reason="no_scope")
                return
            if self._submit_form is None:
                logger.warning("collaborator_missing", collaborator="submit_form")
                return

            try:
                self._enter(DispatchPhase.SUBMITTING, "submit_form")
                form = dict(data)
                self.store.set(IS_SUBMITTING, True)
                self.store.set_json(FORM_DATA, self._encode_form(form))
                if not self._spawn(self._run_submit(form)):
                    self.store.set(IS_SUBMITTING, False)
            except Exception as e:
                logger.error("submit_failed", error=str(e), exc_info=True)
            finally:
                self._enter(DispatchPhase.IDLE, "submit_form")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _handle_navigate(self, action: NavigateAction) -> None:
        self._enter(DispatchPhase.NAVIGATING, action.type)
        route = action.resolved_route(self.settings.default_route)
        if self._navigate is None:
            logger.warning("collaborator_missing", collaborator="navigate", route=route)
            return
        try:
            self._navigate(route, dict(action.payload) if action.payload is not None else None)
        except Exception as e:
            logger.error("navigation_failed", route=route, error=str(e))
            self.metrics.record_error(type(e).__name__, "navigate")

    def _handle_api_call(self, action: ApiCallAction) -> None:
        if self.scope is None:
            logger.info("api_call_skipped", url=action.url, reason="no_scope")
            return
        if self._call_api is None:
            logger.warning("collaborator_missing", collaborator="call_api", url=action.url)
            return

        self._enter(DispatchPhase.CALLING, action.type)
        self.store.set(IS_LOADING, True)
        if not self._spawn(self._run_api_call(action)):
            self.store.set(IS_LOADING, False)

    def _handle_show_dialog(self, action: ShowDialogAction) -> None:
        self._enter(DispatchPhase.SHOWING_DIALOG, action.type)
        payload = {"title": action.title, "message": action.message, "type": action.dialog_type}
        self.store.set_json(self.settings.dialog_state_key, safe_json_dumps(payload))

        if self._show_dialog is None:
            logger.warning("collaborator_missing", collaborator="show_dialog")
            return
        try:
            self._show_dialog(action.title, action.message, action.dialog_type)
        except Exception as e:
            logger.error("show_dialog_failed", title=action.title, error=str(e))
            self.metrics.record_error(type(e).__name__, "show_dialog")

    def _handle_update_state(self, action: UpdateStateAction) -> None:
        self._enter(DispatchPhase.MUTATING, action.type)
        self.store.set(action.key, StateValue.from_string(action.value))
        logger.debug("state_updated", key=action.key, value=action.value)

    def _handle_reset(self, action: ResetAction) -> None:
        self._enter(DispatchPhase.RESETTING, action.type)
        self.store.clear()
        logger.info("state_reset")

    def _handle_custom(self, action: CustomAction) -> None:
        self._enter(DispatchPhase.INVOKING, action.type)
        handler = self._custom_handlers.get(action.action)
        if handler is None:
            logger.warning("custom_handler_missing", name=action.action)
            self.store.set(LAST_CUSTOM_ACTION_ERROR, StringValue(f"No handler for: {action.action}"))
            return

        data = dict(action.data) if action.data is not None else None
        try:
            handler(data)
        except Exception as e:
            logger.error("custom_action_failed", name=action.action, error=str(e))
            self.metrics.record_error(type(e).__name__, "custom")
            self.store.set(LAST_CUSTOM_ACTION_ERROR, StringValue(_message(e)))
            return

        self.store.set(LAST_CUSTOM_ACTION, StringValue(action.action))
        self.store.set(CUSTOM_ACTION_DATA, MapValue(dict(action.data or {})))

    # ------------------------------------------------------------------
    # Asynchronous work
    # ------------------------------------------------------------------

    async def _run_api_call(self, action: ApiCallAction) -> None:
        start = time.time()
        chained: str | None
        try:
            response = ApiResponse.coerce(
                await self._call_api(
                    action.url,
                    action.method.upper(),
                    dict(action.headers) if action.headers is not None else None,
                    dict(action.body) if action.body is not None else None,
                )
            )
            succeeded = response.is_success
        except Exception as e:
            logger.warning("api_call_failed", url=action.url, error=str(e))
            self.store.set(IS_LOADING, False)
            self.store.set(LAST_API_ERROR, StringValue(_message(e)))
            self.store.set(API_STATUS, StringValue("error"))
            chained, status = action.on_error, "error"
        else:
            self.store.set(IS_LOADING, False)
            if succeeded:
                self.store.set(LAST_API_RESPONSE, StringValue(response.body or ""))
                self.store.set(API_STATUS, StringValue("success"))
                chained, status = action.on_success, "success"
            else:
                logger.warning("api_call_rejected", url=action.url, status_code=response.status_code)
                self.store.set(
                    LAST_API_ERROR,
                    StringValue(response.body or f"HTTP {response.status_code}"),
                )
                self.store.set(API_STATUS, StringValue("error"))
                chained, status = action.on_error, "error"

        self.metrics.record_async_operation("api_call", status, time.time() - start)
        if chained:
            self.dispatch_string(chained)

    async def _run_submit(self, form: dict[str, Any]) -> None:
        start = time.time()
        error: Any = None
        try:
            result = await self._submit_form(form)
            if isinstance(result, Failure):
                error = result.failure()
        except Exception as e:
            error = e

        self.store.set(IS_SUBMITTING, False)
        if error is None:
            self.store.set(FORM_SUBMISSION_STATUS, StringValue("success"))
            self.store.set(LAST_FORM_SUBMISSION, IntValue(_now_ms()))
            logger.info("form_submitted", fields=len(form))
            status = "success"
        else:
            self.store.set(FORM_SUBMISSION_STATUS, StringValue("error"))
            self.store.set(FORM_SUBMISSION_ERROR, StringValue(_message(error)))
            logger.warning("form_submission_failed", error=str(error))
            status = "error"

        self.metrics.record_async_operation("submit_form", status, time.time() - start)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> bool:
        try:
            task = self.scope.create_task(coro)
        except Exception as e:
            coro.close()
            logger.error("task_spawn_failed", error=str(e))
            return False
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enter(self, phase: DispatchPhase, action_type: str) -> None:
        self._phase = phase
        self._transitions.append(Transition(phase, action_type))

    @staticmethod
    def _encode_form(form: dict[str, Any]) -> str:
        try:
            return safe_json_dumps(form)
        except (TypeError, ValueError):
            return safe_json_dumps({key: str(value) for key, value in form.items()})
