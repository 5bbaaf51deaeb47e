import logging
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import Field

from commands.dispatcher import dispatch, execute_intent
from commands.intents import CommandContext, CommandIntent
from commands.interpreter import NormalizedCommand, interpret
from extraction.syllabus_extractor import SyllabusExtractor
from greedy.errors import GreedyError, UpstreamError
from greedy.models import Assignment, CamelModel, CommandResult, FileAttachment
from llm.llm_client import LLMClient
from llm.schemas import PriorityAssessment
from prioritization.document_priority import PriorityAnalyzer, TextExtractor, default_assessment
from prioritization.recommender import Recommendation, recommend
from storage.classroom_store import ClassroomStore

logger = logging.getLogger(__name__)

CHAT_ERROR_TEXT = "I'm sorry, I encountered an error processing your request. Please try again."


class FunctionResult(CamelModel):
    name: str
    result: CommandResult


class ChatResponse(CamelModel):
    text: str = ""
    function_calls: List[Dict[str, Any]] = Field(default_factory=list)
    function_results: List[FunctionResult] = Field(default_factory=list)
    error: Optional[str] = None


class GreedyBackend:
    """Central orchestration: chat turns, syllabus import and priority analysis."""

    def __init__(
        self,
        store: ClassroomStore,
        llm_client: Optional[LLMClient] = None,
        extractor: Optional[TextExtractor] = None,
    ):
        self.store = store
        self._llm = llm_client
        self.extractor = extractor

    @property
    def llm(self) -> LLMClient:
        if self._llm is None:
            try:
                self._llm = LLMClient()
            except RuntimeError as e:
                # missing API key and similar configuration problems
                raise UpstreamError(f"Language model is not configured: {e}") from e
        return self._llm

    def _selected(self, selected: Optional[Dict[str, Any]]) -> Optional[Assignment]:
        if not selected:
            return None
        try:
            return Assignment.model_validate(selected)
        except ValueError:
            logger.warning("Ignoring malformed selected assignment %r", selected)
            return None

    def chat(
        self,
        message: str,
        class_name: Optional[str] = None,
        selected_assignment: Optional[Dict[str, Any]] = None,
        all_assignments: Optional[List[Dict[str, Any]]] = None,
        files: Optional[List[FileAttachment]] = None,
        today: Optional[date] = None,
    ) -> ChatResponse:
        """Process one chat turn end to end.

        Intents are dispatched only after the whole model reply has been parsed.
        """
        files = files or []
        today = today or date.today()
        selected = self._selected(selected_assignment)

        try:
            reply = self.llm.interpret_message(message, today=today, selected=selected, files=files)
        except UpstreamError as e:
            logger.error("Chat model call failed: %s", e)
            return ChatResponse(text=CHAT_ERROR_TEXT, error=e.message)

        assignments = all_assignments
        if assignments is None and class_name and self.store.has_class(class_name):
            assignments = [a.to_record() for a in self.store.list_assignments(class_name)]

        context = CommandContext(
            selected_assignment_id=(selected_assignment or {}).get("id") or None,
            class_name=class_name,
            files=files,
            assignments=assignments,
            today=today,
        )

        results = []
        for call in reply.function_calls:
            logger.info("Processing function call %s", call.name)
            results.append(FunctionResult(name=call.name, result=self._run(call.name, call.args, context)))

        return ChatResponse(
            text=reply.text,
            function_calls=[c.model_dump() for c in reply.function_calls],
            function_results=results,
        )

    def _run(self, name: str, args: Dict[str, Any], context: CommandContext) -> CommandResult:
        try:
            command = interpret(CommandIntent(name=name, args=args), context)
        except GreedyError as e:
            return CommandResult.failure(e.kind, e.message)

        if command.name == "createAssignment" and command.files:
            self._apply_document_priority(command)
        return dispatch(command, self.store)

    def _apply_document_priority(self, command: NormalizedCommand) -> None:
        try:
            analyzer = PriorityAnalyzer(self.llm, self.extractor)
        except UpstreamError as e:
            logger.warning("Skipping document priority: %s", e)
            return
        assessment = analyzer.analyze_attachments(command.files)
        if assessment is not None:
            command.fields.setdefault("priority", assessment.priority)

    def execute(self, intent: Dict[str, Any], context: Optional[CommandContext] = None) -> CommandResult:
        """Run a single intent without the model, e.g. from a form submit."""
        return execute_intent(intent, context, self.store)

    def recommend_class(self, class_slug: str, current_date: Optional[date] = None) -> CommandResult:
        try:
            self.store.get_class(class_slug)
        except GreedyError as e:
            return CommandResult.failure(e.kind, e.message)
        recommendation: Recommendation = recommend(self.store.list_assignments(class_slug), current_date)
        return CommandResult.ok(recommendation.message, data=recommendation.model_dump(mode="json", by_alias=True))

    def analyze_priority(
        self, content: Optional[str] = None, attachment: Optional[FileAttachment] = None
    ) -> PriorityAssessment:
        try:
            analyzer = PriorityAnalyzer(self.llm, self.extractor)
        except UpstreamError as e:
            logger.warning("Priority analysis unavailable: %s", e)
            return default_assessment("API key not available. Setting default priority.")
        if attachment is not None:
            return analyzer.analyze_attachment(attachment)
        return analyzer.analyze_text(content or "")

    def create_class_from_syllabus(self, text: str, today: Optional[date] = None) -> CommandResult:
        """Summarize syllabus text, create the class card and one timeline assignment per suggestion."""
        try:
            summary = SyllabusExtractor(self.llm).extract(text, today=today)
        except GreedyError as e:
            logger.error("Syllabus import failed: %s", e)
            return CommandResult.failure(e.kind, f"Failed to extract class information from syllabus: {e.message}")

        class_fields = {"class_name": summary.class_name, "topics": summary.topics}
        if summary.description:
            class_fields["description"] = summary.description
        if summary.schedule:
            class_fields["schedule"] = summary.schedule
        created = dispatch(NormalizedCommand(name="createClassCard", fields=class_fields), self.store)
        if not created.success:
            return created

        slug = created.data["slug"]
        assignments = []
        for item in summary.assignments:
            fields = {
                "name": item.name,
                "start_date": item.due_date,
                "end_date": item.due_date,
                "description": item.description or "",
            }
            result = dispatch(NormalizedCommand(name="createAssignment", fields=fields, class_slug=slug), self.store)
            if result.success:
                assignments.append(result.data)
            else:
                logger.warning("Skipping syllabus assignment %r: %s", item.name, result.message)

        return CommandResult.ok(
            f"Successfully created class: {created.data['name']}",
            data={"class": created.data, "assignments": assignments},
        )
