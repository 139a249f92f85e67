from typing import Any

from app.logging.logger import Log
from app.triage.classifier import DocumentClassifier
from app.triage.extractors import BaseExtractor
from app.triage.models import DocumentFormat, PipelineState
from app.triage.pipeline import PipelineContext, PipelineStep
from app.triage.router import ActionRouter


class ClassifyStep(PipelineStep):
    name = "Classifier"
    state = PipelineState.CLASSIFYING

    def __init__(self, classifier: DocumentClassifier) -> None:
        self._classifier = classifier

    def describe_input(self, context: PipelineContext) -> dict[str, Any]:
        submission = context.submission
        if submission.input_type is DocumentFormat.PDF:
            content = f"PDF File: {submission.display_name}"
        else:
            content = submission.content
        return {"documentContent": content, "documentFormat": submission.input_type.value}

    def run(self, context: PipelineContext) -> PipelineContext:
        classifier_input = self.describe_input(context)
        context.classification = self._classifier.classify(
            classifier_input["documentContent"],
            classifier_input["documentFormat"],
        )
        return context

    def describe_output(self, context: PipelineContext) -> Any:
        return context.classification.to_dict() if context.classification else None


class ExtractStep(PipelineStep):
    state = PipelineState.EXTRACTING

    def __init__(self, extractor: BaseExtractor) -> None:
        self._extractor = extractor
        self.name = extractor.name

    @property
    def format(self) -> DocumentFormat:
        return self._extractor.format

    def describe_input(self, context: PipelineContext) -> dict[str, Any]:
        return self._extractor.describe_input(context.submission)

    def run(self, context: PipelineContext) -> PipelineContext:
        agent_input = self._extractor.build_input(context.submission)
        context.extraction = self._extractor.extract(agent_input)
        Log.info(f"{self.name} extracted data successfully")
        return context

    def describe_output(self, context: PipelineContext) -> Any:
        return context.extraction.to_payload() if context.extraction else None


class RouteStep(PipelineStep):
    name = "Action Router"
    state = PipelineState.ROUTING

    def __init__(self, router: ActionRouter) -> None:
        self._router = router

    def describe_input(self, context: PipelineContext) -> dict[str, Any]:
        if context.classification is None or context.extraction is None:
            raise ValueError("Classification and extraction must be set before routing")
        return {
            "agentOutput": context.extraction.to_payload(),
            "intent": context.classification.intent,
            "format": context.classification.format,
        }

    def run(self, context: PipelineContext) -> PipelineContext:
        router_input = self.describe_input(context)
        context.routing = self._router.route(
            router_input["agentOutput"],
            intent=router_input["intent"],
            format=router_input["format"],
        )
        Log.info(f"Action triggered: {context.routing.action_taken}")
        return context

    def describe_output(self, context: PipelineContext) -> Any:
        return context.routing.to_dict() if context.routing else None

    def action_label(self, context: PipelineContext) -> str | None:
        return f"Action: {context.routing.action_taken}" if context.routing else None
