"""Microphone capture and PCM playback for pronunciation practice."""

from __future__ import annotations

import io
import logging
import wave

from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtMultimedia import QAudio, QAudioFormat, QAudioSink, QAudioSource, QMediaDevices

from cdb_quizz.constants.network_constants import TTS_SAMPLE_RATE
from cdb_quizz.core.services.game_session import RecordingError

logger = logging.getLogger(__name__)

RECORDING_SAMPLE_RATE = 16000


def _mono_int16_format(sample_rate: int) -> QAudioFormat:
    audio_format = QAudioFormat()
    audio_format.setSampleRate(sample_rate)
    audio_format.setChannelCount(1)
    audio_format.setSampleFormat(QAudioFormat.SampleFormat.Int16)
    return audio_format


def pcm_to_wav(pcm: bytes, sample_rate: int, channels: int = 1, sample_width: int = 2) -> bytes:
    """Wrap raw little-endian PCM in a WAV container."""
    output = io.BytesIO()
    with wave.open(output, "wb") as wav_file:
        wav_file.setnchannels(channels)
        wav_file.setsampwidth(sample_width)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(pcm)
    return output.getvalue()


class MicrophoneRecorder:
    """Records the default input device into memory until :meth:`stop`."""

    mime_type = "audio/wav"

    def __init__(self) -> None:
        self._source: QAudioSource | None = None
        self._buffer: QBuffer | None = None
        self._format = _mono_int16_format(RECORDING_SAMPLE_RATE)

    @property
    def is_recording(self) -> bool:
        return self._source is not None

    def start(self) -> None:
        """Begin capturing. Raises :class:`RecordingError` when no microphone can be opened."""
        if self._source is not None:
            return
        device = QMediaDevices.defaultAudioInput()
        if device.isNull():
            raise RecordingError("No audio input device available.")
        if not device.isFormatSupported(self._format):
            raise RecordingError(f"{device.description()} does not support 16-bit mono capture.")

        buffer = QBuffer()
        buffer.open(QIODevice.OpenModeFlag.ReadWrite)
        source = QAudioSource(device, self._format)
        source.start(buffer)
        if source.error() != QAudio.Error.NoError:
            source.stop()
            raise RecordingError(f"Microphone could not be opened ({source.error()}).")
        self._source = source
        self._buffer = buffer
        logger.info("Recording from %s", device.description())

    def stop(self) -> bytes:
        """Stop capturing and return the recording as WAV bytes."""
        if self._source is None or self._buffer is None:
            return b""
        self._source.stop()
        pcm = bytes(self._buffer.data())
        self._buffer.close()
        self._source = None
        self._buffer = None
        return pcm_to_wav(pcm, RECORDING_SAMPLE_RATE)


class PcmPlayer:
    """Plays synthesized speech: raw 16-bit mono PCM."""

    def __init__(self, sample_rate: int = TTS_SAMPLE_RATE) -> None:
        self._format = _mono_int16_format(sample_rate)
        self._sink: QAudioSink | None = None
        self._buffer: QBuffer | None = None

    def play(self, pcm: bytes) -> None:
        self.stop()
        buffer = QBuffer()
        buffer.setData(QByteArray(pcm))
        buffer.open(QIODevice.OpenModeFlag.ReadOnly)
        sink = QAudioSink(QMediaDevices.defaultAudioOutput(), self._format)
        sink.start(buffer)
        self._sink = sink
        self._buffer = buffer

    def stop(self) -> None:
        if self._sink is not None:
            self._sink.stop()
            self._sink = None
        if self._buffer is not None:
            self._buffer.close()
            self._buffer = None
