"""
hbwrapper.enums
~~~~~~~~~~~~~~~
The HandBrakeCLI vocabulary.

Each member's value is the raw token. Some tokens still need rendering
before they reach the command line (``4_0`` → ``4.0``, ``copy__aac`` →
``copy:aac``); that is done by ``command_builder.format_enum``.
"""

from __future__ import annotations

from enum import Enum


# ── Destination ───────────────────────────────────────────────────────────────

class Format(Enum):
    AV_MP4  = "av_mp4"
    AV_MKV  = "av_mkv"
    AV_WEBM = "av_webm"

    @property
    def extension(self) -> str:
        """File extension implied by the container, e.g. ``.mp4``."""
        return "." + self.value.split("_", 1)[1]


# ── Video ─────────────────────────────────────────────────────────────────────

class VideoEncoder(Enum):
    X264        = "x264"
    X264_10BIT  = "x264_10bit"
    VCE_H264    = "vce_h264"
    NVENC_H264  = "nvenc_h264"
    X265        = "x265"
    X265_10BIT  = "x265_10bit"
    X265_12BIT  = "x265_12bit"
    NVENC_H265  = "nvenc_h265"
    MPEG4       = "mpeg4"
    MPEG2       = "mpeg2"
    VP8         = "VP8"
    VP9         = "VP9"
    THEORA      = "theora"


class EncoderLevel(Enum):
    L1_0 = "1_0"
    L1B  = "1b"
    L1_1 = "1_1"
    L1_2 = "1_2"
    L1_3 = "1_3"
    L2_0 = "2_0"
    L2_1 = "2_1"
    L2_2 = "2_2"
    L3_0 = "3_0"
    L3_1 = "3_1"
    L3_2 = "3_2"
    L4_0 = "4_0"
    L4_1 = "4_1"
    L4_2 = "4_2"
    L5_0 = "5_0"
    L5_1 = "5_1"
    L5_2 = "5_2"


class FrameRateSetting(Enum):
    VFR = "vfr"  # variable, preserves source timing
    CFR = "cfr"  # constant
    PFR = "pfr"  # peak-limited


# ── Audio ─────────────────────────────────────────────────────────────────────

class AudioTracks(Enum):
    FIRST_AUDIO = "first_audio"
    ALL_AUDIO   = "all_audio"


class AudioEncoder(Enum):
    NONE         = "none"
    AV_AAC       = "av_aac"
    CA_AAC       = "ca_aac"
    CA_HAAC      = "ca_haac"
    COPY_AAC     = "copy__aac"
    AC3          = "ac3"
    COPY_AC3     = "copy__ac3"
    EAC3         = "eac3"
    COPY_EAC3    = "copy__eac3"
    COPY_TRUEHD  = "copy__truehd"
    COPY_DTS     = "copy__dts"
    COPY_DTSHD   = "copy__dtshd"
    MP3          = "mp3"
    COPY_MP3     = "copy__mp3"
    VORBIS       = "vorbis"
    FLAC16       = "flac16"
    FLAC24       = "flac24"
    COPY_FLAC    = "copy__flac"
    OPUS         = "opus"
    COPY         = "copy"


class AudioCopyMask(Enum):
    AAC    = "aac"
    AC3    = "ac3"
    EAC3   = "eac3"
    TRUEHD = "truehd"
    DTS    = "dts"
    DTSHD  = "dtshd"
    MP3    = "mp3"
    FLAC   = "flac"


class Mixdown(Enum):
    MONO       = "mono"
    LEFT_ONLY  = "left_only"
    RIGHT_ONLY = "right_only"
    STEREO     = "stereo"
    DPL1       = "dpl1"
    DPL2       = "dpl2"
    SURROUND_5_1 = "5point1"
    SURROUND_6_1 = "6point1"
    SURROUND_7_1 = "7point1"
    SURROUND_5_2_LFE = "5_2_lfe"


class AudioSampleRate(Enum):
    AUTO      = "auto"
    KHZ_8     = "8"
    KHZ_11_025 = "11_025"
    KHZ_12    = "12"
    KHZ_16    = "16"
    KHZ_22_05 = "22_05"
    KHZ_24    = "24"
    KHZ_32    = "32"
    KHZ_44_1  = "44_1"
    KHZ_48    = "48"


class AudioDither(Enum):
    AUTO          = "auto"
    NONE          = "none"
    RECTANGULAR   = "rectangular"
    TRIANGULAR    = "triangular"
    TRIANGULAR_HP = "triangular_hp"
    TRIANGULAR_NS = "triangular_ns"


# ── Picture ───────────────────────────────────────────────────────────────────

class Anamorphic(Enum):
    NON_ANAMORPHIC   = "non_anamorphic"
    AUTO_ANAMORPHIC  = "auto_anamorphic"
    LOOSE_ANAMORPHIC = "loose_anamorphic"


class ColorMatrix(Enum):
    BT2020 = "2020"
    BT709  = "709"
    BT601  = "601"
    NTSC   = "ntsc"
    PAL    = "pal"


# ── Filters ───────────────────────────────────────────────────────────────────

class NlmeansTune(Enum):
    NONE       = "none"
    FILM       = "film"
    GRAIN      = "grain"
    HIGHMOTION = "highmotion"
    ANIMATION  = "animation"
    TAPE       = "tape"
    SPRITE     = "sprite"


class ChromaSmoothTune(Enum):
    NONE     = "none"
    TINY     = "tiny"
    SMALL    = "small"
    MEDIUM   = "medium"
    WIDE     = "wide"
    VERYWIDE = "verywide"


class UnsharpTune(Enum):
    NONE       = "none"
    ULTRAFINE  = "ultrafine"
    FINE       = "fine"
    MEDIUM     = "medium"
    COARSE     = "coarse"
    VERYCOARSE = "verycoarse"


class LapsharpTune(Enum):
    NONE      = "none"
    FILM      = "film"
    GRAIN     = "grain"
    ANIMATION = "animation"
    SPRITE    = "sprite"


class DeblockTune(Enum):
    SMALL  = "small"
    MEDIUM = "medium"
    LARGE  = "large"


# ── Source ────────────────────────────────────────────────────────────────────

class TimeUnit(Enum):
    DURATION = "duration"  # seconds
    FRAME    = "frame"
    PTS      = "pts"       # 90 kHz clock


ALL_ENUMS: tuple[type[Enum], ...] = (
    Format, VideoEncoder, EncoderLevel, FrameRateSetting,
    AudioTracks, AudioEncoder, AudioCopyMask, Mixdown, AudioSampleRate,
    AudioDither, Anamorphic, ColorMatrix,
    NlmeansTune, ChromaSmoothTune, UnsharpTune, LapsharpTune, DeblockTune,
    TimeUnit,
)
