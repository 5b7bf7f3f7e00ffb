"""
Profile analyzer - drives an OpenAI assistant run and always returns a report

One analysis attempt walks these stages:

    CREATE_CONVERSATION -> SUBMIT_PROMPT -> START_RUN -> POLL_COMPLETION
        -> EXTRACT_MESSAGE -> PARSE_OUTPUT -> COMPLETED

A failing stage ends the attempt. After the last attempt (or on any
unexpected error) the analyzer moves to FALLBACK and returns the
template report from fallback_report.py.
"""
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import httpx
import openai

from profile_review.config import Settings
from profile_review.models import (
    AnalysisResult,
    AnalysisStage,
    RunStatus,
    ScrapedProfile,
    TERMINAL_FAILURE_STATUSES
)
from profile_review.services.analysis_prompt import STRUCTURED_OUTPUT_REQUEST, build_analysis_prompt
from profile_review.services.fallback_report import build_fallback_report
from profile_review.utils.exceptions import AnalysisError, EmptyResponse, RunFailed, RunTimeout, extract_api_error

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (AnalysisError, openai.OpenAIError, httpx.HTTPError)


class RunPoller:
    """Bounded polling of an assistant run: PENDING -> COMPLETED | FAILED | TIMED_OUT."""

    def __init__(self, client, interval: float = 2.0, max_polls: int = 30,
                 sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.interval = interval
        self.max_polls = max_polls
        self.sleep = sleep
        self.state = RunStatus.PENDING

    def wait(self, thread_id: str, run_id: str) -> RunStatus:
        """Returns COMPLETED or raises RunFailed / RunTimeout. The final state stays on self.state."""
        self.state = RunStatus.PENDING
        for poll in range(1, self.max_polls + 1):
            run = self.client.beta.threads.runs.retrieve(run_id=run_id, thread_id=thread_id)
            status = getattr(run, 'status', None)
            logger.info(f"Run status ({poll}/{self.max_polls}): {status}", extra={'run_id': run_id})

            if status == RunStatus.COMPLETED.value:
                self.state = RunStatus.COMPLETED
                return self.state
            if status in TERMINAL_FAILURE_STATUSES:
                self.state = RunStatus.FAILED
                raise RunFailed(status, details={'run_id': run_id, 'last_error': str(getattr(run, 'last_error', None))})

            if poll < self.max_polls:
                self.sleep(self.interval)

        self.state = RunStatus.TIMED_OUT
        raise RunTimeout(self.max_polls, details={'run_id': run_id})


@dataclass
class AnalysisAttempt:
    """Progress of one attempt, kept for logging when a stage fails."""
    number: int
    stage: AnalysisStage = AnalysisStage.CREATE_CONVERSATION
    conversation_id: Optional[str] = None
    run_id: Optional[str] = None


def latest_assistant_text(messages) -> str:
    """Join the text fragments of the newest assistant message (messages are newest first)."""
    for message in messages:
        if getattr(message, 'role', None) != 'assistant':
            continue
        fragments = [
            block.text.value
            for block in (getattr(message, 'content', None) or [])
            if getattr(block, 'type', None) == 'text' and getattr(block, 'text', None) is not None
        ]
        text = '\n'.join(fragment for fragment in fragments if fragment)
        if not text.strip():
            raise EmptyResponse("Latest assistant message has no text content")
        return text
    raise EmptyResponse()


def _reject_constant(name: str):
    raise ValueError(f"Non-finite number {name} in assistant output")


def parse_structured_output(text: str) -> Tuple[Optional[Dict[str, Any]], bool]:
    """Strict JSON parse; only a JSON object counts as structured output."""
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None, False
    if isinstance(parsed, dict):
        return parsed, True
    return None, False


class ProfileAnalyzer:
    """Analysis engine: assistant conversation with retries and a fallback report."""

    def __init__(self, settings: Settings, client=None, sleep: Callable[[float], None] = time.sleep):
        self.settings = settings
        self.client = client
        self.sleep = sleep

    def analyze(self, profile: ScrapedProfile, objective: str) -> AnalysisResult:
        """Never raises for provider-side failures; falls back to the template report."""
        try:
            if self.client is None or not self.settings.openai_assistant_id:
                logger.warning("OpenAI assistant not configured, using fallback report")
                return self._fallback(profile, objective)
            return self._analyze_with_retries(profile, objective)
        except Exception as e:
            logger.error(f"Unexpected analysis error: {type(e).__name__}: {e}", exc_info=True)
            return self._fallback(profile, objective)

    def _analyze_with_retries(self, profile: ScrapedProfile, objective: str) -> AnalysisResult:
        prompt = build_analysis_prompt(profile, objective, self.settings.report_locale)
        max_attempts = self.settings.max_analysis_attempts
        last_error = None

        for number in range(1, max_attempts + 1):
            attempt = AnalysisAttempt(number=number)
            logger.info(f"Analysis attempt {number}/{max_attempts}", extra={'objective': objective})
            try:
                return self._run_attempt(attempt, prompt, objective)
            except RETRYABLE_ERRORS as e:
                last_error = e
                logger.warning(f"Analysis attempt {number} failed at {attempt.stage.value}: {e}", extra={
                    'conversation_id': attempt.conversation_id,
                    'run_id': attempt.run_id,
                    **extract_api_error(e)
                })
            if number < max_attempts:
                delay = self.settings.analysis_backoff_seconds * number
                logger.info(f"Retrying analysis in {delay:.1f}s")
                self.sleep(delay)

        logger.error(f"Analysis failed after {max_attempts} attempts: {last_error}")
        return self._fallback(profile, objective)

    def _run_attempt(self, attempt: AnalysisAttempt, prompt: str, objective: str) -> AnalysisResult:
        threads = self.client.beta.threads

        attempt.stage = AnalysisStage.CREATE_CONVERSATION
        thread = threads.create()
        attempt.conversation_id = thread.id

        attempt.stage = AnalysisStage.SUBMIT_PROMPT
        threads.messages.create(thread_id=thread.id, role='user', content=prompt)
        threads.messages.create(thread_id=thread.id, role='user', content=STRUCTURED_OUTPUT_REQUEST)

        attempt.stage = AnalysisStage.START_RUN
        run = threads.runs.create(
            thread_id=thread.id,
            assistant_id=self.settings.openai_assistant_id,
            response_format={'type': 'json_object'},
        )
        attempt.run_id = run.id

        attempt.stage = AnalysisStage.POLL_COMPLETION
        poller = RunPoller(
            self.client,
            interval=self.settings.poll_interval_seconds,
            max_polls=self.settings.max_polls,
            sleep=self.sleep,
        )
        poller.wait(thread.id, run.id)

        attempt.stage = AnalysisStage.EXTRACT_MESSAGE
        messages = threads.messages.list(thread_id=thread.id, order='desc')
        text = latest_assistant_text(getattr(messages, 'data', None) or [])

        attempt.stage = AnalysisStage.PARSE_OUTPUT
        structured, is_structured = parse_structured_output(text)

        attempt.stage = AnalysisStage.COMPLETED
        logger.info("Analysis completed", extra={
            'conversation_id': attempt.conversation_id,
            'run_id': attempt.run_id,
            'structured': is_structured
        })
        return AnalysisResult(
            analysis_text=text,
            objective=objective,
            analysis_structured=structured,
            is_structured_format=is_structured,
            conversation_id=attempt.conversation_id,
            run_id=attempt.run_id,
        )

    def _fallback(self, profile: ScrapedProfile, objective: str) -> AnalysisResult:
        logger.info(f"Analysis stage: {AnalysisStage.FALLBACK.value}", extra={'objective': objective})
        return build_fallback_report(profile, objective)
