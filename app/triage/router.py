import json
from typing import Any

from app.llm.exceptions import ModelInvocationError
from app.llm.invoker import ModelInvoker
from app.logging.logger import Log
from app.schema.exceptions import SchemaValidationError
from app.schema.schemas import ROUTING
from app.triage.exceptions import RoutingError
from app.triage.models import RouteAction, RoutingDecision

NO_ROUTE_DETAILS = "No action was taken as no route matched."


class SimulatedActionClient:
    """Stands in for the CRM and risk systems; no request leaves the process."""

    def post(self, endpoint: str, payload: dict[str, Any]) -> str:
        Log.info(f"Simulating REST call to {endpoint} with data: {payload}")
        return f"Simulated {endpoint} call with data: {json.dumps(payload)}"


class ActionRouter:
    """Chooses a follow-up action for an extraction result and triggers it."""

    TEMPLATE = "route_action"

    ENDPOINTS: dict[str, str] = {
        RouteAction.CREATE_TICKET.value: "/crm/create_ticket",
        RouteAction.ESCALATE_ISSUE.value: "/crm/escalate",
        RouteAction.FLAG_COMPLIANCE_RISK.value: "/risk_alert",
    }

    def __init__(
        self,
        invoker: ModelInvoker,
        action_client: SimulatedActionClient | None = None,
    ) -> None:
        self._invoker = invoker
        self._action_client = action_client or SimulatedActionClient()

    def route(self, agent_output: dict[str, Any], intent: str, format: str) -> RoutingDecision:
        """Ask the model for an action, then simulate the matching call.

        Raises:
            RoutingError: if the model call fails or returns a malformed decision.
        """
        try:
            output = self._invoker.invoke(
                self.TEMPLATE,
                {
                    "format": format,
                    "intent": intent,
                    "agent_output": json.dumps(agent_output),
                },
                ROUTING,
            )
        except (ModelInvocationError, SchemaValidationError) as exc:
            raise RoutingError(str(exc)) from exc

        action = (output.get("actionTaken") or "").strip()
        endpoint = self.ENDPOINTS.get(action)
        if endpoint is None:
            Log.info(f"No route matched action {action!r}")
            return RoutingDecision(
                action_taken=RouteAction.NO_ACTION_TAKEN.value,
                details=NO_ROUTE_DETAILS,
            )

        details = self._action_client.post(endpoint, agent_output)
        return RoutingDecision(action_taken=action, details=details)
