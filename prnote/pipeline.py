"""End-to-end PR description pipeline.

collect context -> extract sections -> resolve ticket -> detect API
-> build prompt -> generate -> reconcile -> publish

Every fatal error propagates out of run_pipeline before the publish step,
so the description is updated exactly once or not at all.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from prnote.api_relevance import detect_api_signals
from prnote.config import Settings
from prnote.github import GitHubClient, PullRequestContext, collect_context
from prnote.llm import BaseLLMProvider, GenerationRequest, LLMResult
from prnote.logging import get_logger
from prnote.reconcile import Reconciliation, reconcile, strip_generated_block
from prnote.sections import SectionMap, extract_sections
from prnote.template import build_generation_request
from prnote.ticket import TicketInfo, resolve_ticket

logger = get_logger("pipeline")


@dataclass
class PipelineResult:
    """Everything a run produced, for reporting."""

    context: PullRequestContext
    section_map: SectionMap
    ticket: Optional[TicketInfo]
    api_signals: list[str]
    request: GenerationRequest
    llm_result: LLMResult
    reconciliation: Reconciliation
    published: bool

    @property
    def api_relevant(self) -> bool:
        return bool(self.api_signals)


def run_pipeline(
    settings: Settings,
    client: GitHubClient,
    provider: BaseLLMProvider,
    dry_run: bool = False,
    on_request: Optional[Callable[[GenerationRequest], None]] = None,
) -> PipelineResult:
    """Generate and publish the description for one pull request.

    Args:
        settings: Run settings.
        client: GitHub client used for reads and the final update.
        provider: LLM provider.
        dry_run: Compute the description but do not publish it.
        on_request: Called with the GenerationRequest before it is sent.

    Returns:
        The PipelineResult.

    Raises:
        RequiredFetchError: If commits, files or the PR record are unavailable.
        DiffFetchError: If the diff is unavailable under the abort policy.
        EmptyGenerationError: If the model returns an empty response.
        LLMError: If the generation call fails.
        PublishError: If the update is rejected.
    """
    context = collect_context(client, settings)
    logger.info(
        f"Collected {len(context.commit_messages)} commits and "
        f"{len(context.file_changes)} files for {context.full_name}"
    )

    if settings.use_marker:
        context = replace(context, existing_body=strip_generated_block(context.existing_body))

    section_map = extract_sections(context.existing_body)
    ticket = resolve_ticket(context.branch_name, settings.ticket)
    api_signals = detect_api_signals(context)

    logger.debug(f"Existing sections: {[name.value for name in section_map.present_names()] or 'none'}")
    logger.debug(f"Ticket: {ticket.id if ticket else 'none'}")
    logger.debug(f"API signals: {api_signals or 'none'}")

    request = build_generation_request(context, section_map, bool(api_signals), ticket)
    if on_request is not None:
        on_request(request)

    llm_result = provider.generate(request)
    logger.info(
        f"Generated description with {llm_result.model} "
        f"({llm_result.input_tokens} input / {llm_result.output_tokens} output tokens)"
    )

    reconciliation = reconcile(
        context.existing_body,
        llm_result.text,
        section_map,
        use_marker=settings.use_marker,
    )
    logger.info(f"Reconciliation: {reconciliation.decision.value}")

    if not dry_run:
        client.update_pull_request_body(context.owner, context.repo, context.number, reconciliation.body)

    return PipelineResult(
        context=context,
        section_map=section_map,
        ticket=ticket,
        api_signals=api_signals,
        request=request,
        llm_result=llm_result,
        reconciliation=reconciliation,
        published=not dry_run,
    )
