"""TTS job lifecycle: submit, poll until terminal, retrieve audio.

Responsibilities:
- Submit a job request and decode the job token from the response.
- Poll the per-job status URL at a fixed interval until a terminal state.
- Resolve the absolute audio URL and download the payload bytes.

Status handling:
- `started`, `pending`: keep polling.
- `attempt_failed`, `dead`: raise `JobFailedError`.
- `complete_success`: resolve the audio URL and stop.
- anything else, including a missing or non-string status: raise
  `ImproperResponseError` without polling again.

The default `PollPolicy` never gives up; `max_attempts` and `timeout_seconds`
bound it and raise `JobTimeoutError` when exceeded.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import monotonic, sleep
from typing import TYPE_CHECKING, Any, Callable, Mapping

from .errors import ImproperResponseError, JobFailedError, JobTimeoutError
from .models.datatypes import TtsJobRequest, TtsJobResponse, TtsJobResult

if TYPE_CHECKING:
    from .config import ServiceEndpoints
    from .http import FakeYouHttp
    from .telemetry.logger import ClientLogger


STATUS_STARTED = "started"
STATUS_PENDING = "pending"
STATUS_ATTEMPT_FAILED = "attempt_failed"
STATUS_DEAD = "dead"
STATUS_COMPLETE_SUCCESS = "complete_success"

IN_PROGRESS_STATUSES = frozenset({STATUS_STARTED, STATUS_PENDING})
FAILED_STATUSES = frozenset({STATUS_ATTEMPT_FAILED, STATUS_DEAD})


@dataclass(frozen=True, slots=True)
class PollPolicy:
    """Fixed-interval poll policy with optional attempt and time bounds.

    Attributes:
        interval_seconds: Wait between consecutive status requests.
        max_attempts: Maximum status requests, or `None` for no limit.
        timeout_seconds: Maximum elapsed poll time, or `None` for no limit.
            The wait before the final poll is shortened to end at this bound.
        clock: Monotonic clock used for the time bound.
        sleeper: Blocking sleep used between polls.
    """

    interval_seconds: float = 2.0
    max_attempts: int | None = None
    timeout_seconds: float | None = None
    clock: Callable[[], float] = monotonic
    sleeper: Callable[[float], None] = sleep


def read_job_status(payload: Any) -> str:
    """Return `state.status` from a job status payload or raise `ImproperResponseError`."""

    state = payload.get("state") if isinstance(payload, Mapping) else None
    status = state.get("status") if isinstance(state, Mapping) else None
    if not isinstance(status, str):
        raise ImproperResponseError("Job status response is missing string `state.status`.")
    return status


def read_audio_path(payload: Mapping[str, Any]) -> str:
    """Return the relative bucket audio path from a completed job payload."""

    path = payload["state"].get("maybe_public_bucket_wav_audio_path")
    if not isinstance(path, str):
        raise ImproperResponseError(
            "Completed job response is missing string "
            "`state.maybe_public_bucket_wav_audio_path`."
        )
    return path


class JobRunner:
    """Drive one TTS job from submission to downloaded audio bytes."""

    def __init__(
        self,
        http: FakeYouHttp,
        endpoints: ServiceEndpoints,
        policy: PollPolicy | None = None,
        run_logger: ClientLogger | None = None,
    ) -> None:
        self.http = http
        self.endpoints = endpoints
        self.policy = policy if policy is not None else PollPolicy()
        self.run_logger = run_logger

    def submit(self, request: TtsJobRequest) -> TtsJobResponse:
        """POST a job request and decode the job token response."""

        response = self.http.post_json(self.endpoints.inference_url, request.to_payload())
        job = TtsJobResponse.from_payload(self.http.decode_json(response))
        self._log(
            "submit",
            "accepted",
            job_token=job.inference_job_token,
            model_token=request.tts_model_token,
        )
        return job

    def poll(
        self,
        job: TtsJobResponse,
        on_status: Callable[[str], None] | None = None,
    ) -> TtsJobResult:
        """Poll the job status URL until a terminal state is observed."""

        job_token = job.inference_job_token
        url = self.endpoints.job_url(job_token)
        policy = self.policy
        started_at = policy.clock()
        attempts = 0

        while True:
            payload = self.http.get_json(url)
            attempts += 1
            status = read_job_status(payload)
            if self.run_logger is not None:
                self.run_logger.log_debug("poll", "status", job_token=job_token, status=status)
            if on_status is not None:
                on_status(status)

            if status == STATUS_COMPLETE_SUCCESS:
                audio_path = read_audio_path(payload)
                self._log("poll", "complete", job_token=job_token, attempts=attempts)
                return TtsJobResult(
                    job_token=job_token,
                    audio_path=audio_path,
                    audio_url=self.endpoints.audio_url(audio_path),
                )
            if status in FAILED_STATUSES:
                raise JobFailedError(f"Job `{job_token}` ended with status `{status}`.")
            if status not in IN_PROGRESS_STATUSES:
                raise ImproperResponseError(
                    f"Job `{job_token}` reported unknown status `{status}`."
                )

            if policy.max_attempts is not None and attempts >= policy.max_attempts:
                raise JobTimeoutError(
                    f"Job `{job_token}` still `{status}` after {attempts} poll attempt(s)."
                )
            delay = policy.interval_seconds
            if policy.timeout_seconds is not None:
                remaining = policy.timeout_seconds - (policy.clock() - started_at)
                if remaining <= 0:
                    raise JobTimeoutError(
                        f"Job `{job_token}` still `{status}` after "
                        f"{policy.timeout_seconds:g} second(s)."
                    )
                # The last poll lands on the deadline, never past it.
                delay = min(delay, remaining)
            policy.sleeper(delay)

    def fetch_audio(self, result: TtsJobResult) -> bytes:
        """Download the generated audio payload."""

        data = self.http.get_bytes(result.audio_url)
        self._log("download", "complete", job_token=result.job_token, size_bytes=len(data))
        return data

    def run(
        self,
        text: str,
        model_token: str,
        on_status: Callable[[str], None] | None = None,
    ) -> bytes:
        """Submit, poll, and download one job with a fresh idempotency token."""

        request = TtsJobRequest.create(tts_model_token=model_token, inference_text=text)
        job = self.submit(request)
        result = self.poll(job, on_status=on_status)
        return self.fetch_audio(result)

    def _log(self, stage: str, event: str, **context: object) -> None:
        if self.run_logger is not None:
            self.run_logger.log_event(stage, event, **context)
