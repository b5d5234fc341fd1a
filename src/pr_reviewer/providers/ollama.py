# src/pr_reviewer/providers/ollama.py
import asyncio
import logging
from pr_reviewer.errors import ModelInvocationError, ModelTimeoutError
from .base import LLMProvider


logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    """Runs prompts through ``ollama run <model>`` as a child process.

    The prompt goes to stdin, stdin is closed and everything the process
    writes to stdout until it exits is the response. stderr is discarded.
    At most ``max_concurrency`` processes run at once per provider.
    """

    def __init__(
        self,
        model: str = "llama3",
        binary: str = "ollama",
        timeout: float | None = 300.0,
        max_concurrency: int = 2,
    ):
        self.model = model
        self.binary = binary
        self.timeout = timeout or None
        self._slots = asyncio.Semaphore(max_concurrency)

    async def generate(self, prompt: str, model: str | None = None) -> str:
        model = model or self.model
        async with self._slots:
            output = await self._run(prompt, model)
        logger.info(f"Model {model} returned {len(output)} chars")
        return output

    async def _run(self, prompt: str, model: str) -> str:
        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary,
                "run",
                model,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise ModelInvocationError(f"Failed to start {self.binary}: {e}") from e

        logger.info(f"Started {self.binary} run {model} (pid {proc.pid})")
        try:
            stdout, _ = await asyncio.wait_for(
                proc.communicate(prompt.encode("utf-8")),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            await self._kill(proc)
            raise ModelTimeoutError(
                f"{self.binary} run {model} did not finish within {self.timeout}s"
            ) from e
        except asyncio.CancelledError:
            await self._kill(proc)
            raise

        if proc.returncode:
            logger.warning(f"{self.binary} run {model} exited with code {proc.returncode}")
        return stdout.decode("utf-8", errors="replace")

    async def _kill(self, proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
