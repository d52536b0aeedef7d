"""
Speech synthesizers

No real TTS engine is wired in; SampleSynthesizer answers with the
voice's pre-recorded sample.
"""
import logging
from abc import ABC, abstractmethod

from ..domain.job import JobSpec
from ..domain.voice import find_voice
from ..exceptions import SynthesisError

logger = logging.getLogger(__name__)


class Synthesizer(ABC):

    @abstractmethod
    async def synthesize(self, spec: JobSpec) -> str:
        """
        Produce audio for spec

        Returns:
            Reference (URL) to the audio

        Raises:
            SynthesisError: If audio cannot be produced
        """
        pass


class SampleSynthesizer(Synthesizer):
    """
    Return the voice sample URL

    Text containing failure_marker fails on purpose so the failed state
    can be exercised end to end. An empty marker disables this.
    """

    def __init__(self, failure_marker: str = ""):
        self.failure_marker = failure_marker

    async def synthesize(self, spec: JobSpec) -> str:
        if self.failure_marker and self.failure_marker in spec.text:
            raise SynthesisError("Speech synthesis failed for this text")

        voice = find_voice(spec.voice_id)
        if voice is None:
            raise SynthesisError(f"Voice {spec.voice_id} is no longer available")
        return voice.sample_url
