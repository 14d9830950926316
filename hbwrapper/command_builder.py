"""
hbwrapper.command_builder
~~~~~~~~~~~~~~~~~~~~~~~~~
Builds HandBrakeCLI commands as plain list[str].

Every enum value goes through format_enum, which knows the token each
HandBrakeCLI option expects (``copy__aac`` becomes ``copy:aac``, ``4_0``
becomes ``4.0``). A configuration holding an enum it has no rule for
raises TypeError before any process is started.

Options are emitted in a fixed order, grouped the way the HandBrakeCLI
reference groups them:

    source → destination → video → audio → picture → filters → subtitles

Most builds of HandBrakeCLI do not care about order, but for
enable/disable pairs the last flag wins, so the order is part of the
contract and must not be shuffled.
"""

from __future__ import annotations

import shlex
from enum import Enum
from functools import singledispatch
from pathlib import Path

from hbwrapper.configuration import HandbrakeConfiguration
from hbwrapper.enums import (
    Anamorphic,
    AudioCopyMask,
    AudioDither,
    AudioEncoder,
    AudioSampleRate,
    AudioTracks,
    ChromaSmoothTune,
    ColorMatrix,
    DeblockTune,
    EncoderLevel,
    Format,
    FrameRateSetting,
    LapsharpTune,
    Mixdown,
    NlmeansTune,
    TimeUnit,
    UnsharpTune,
    VideoEncoder,
)


# ── Enum formatting ───────────────────────────────────────────────────────────

@singledispatch
def format_enum(value: Enum) -> str:
    """
    Render an enum member as the token HandBrakeCLI expects.

    Dispatches on the enum type; every enumeration in ``hbwrapper.enums``
    has exactly one registered rule. Anything else raises ``TypeError``.
    """
    raise TypeError(
        f"No command-line format registered for {type(value).__name__}: {value!r}"
    )


def _checked(value: Enum, token: str) -> str:
    if not token:
        raise ValueError(f"{value!r} renders to an empty token")
    return token


@format_enum.register(EncoderLevel)
@format_enum.register(AudioSampleRate)
def _dotted(value: Enum) -> str:
    # 4_0 → 4.0, 44_1 → 44.1
    return _checked(value, value.value.replace("_", "."))


@format_enum.register(AudioEncoder)
def _colon_pairs(value: AudioEncoder) -> str:
    # copy__aac → copy:aac, av_aac stays av_aac
    return _checked(value, value.value.replace("__", ":"))


@format_enum.register(Anamorphic)
@format_enum.register(AudioTracks)
def _hyphenated(value: Enum) -> str:
    # loose_anamorphic → loose-anamorphic
    return _checked(value, value.value.replace("_", "-"))


@format_enum.register(Format)
@format_enum.register(VideoEncoder)
@format_enum.register(FrameRateSetting)
@format_enum.register(AudioCopyMask)
@format_enum.register(Mixdown)
@format_enum.register(AudioDither)
@format_enum.register(ColorMatrix)
@format_enum.register(NlmeansTune)
@format_enum.register(ChromaSmoothTune)
@format_enum.register(UnsharpTune)
@format_enum.register(LapsharpTune)
@format_enum.register(DeblockTune)
@format_enum.register(TimeUnit)
def _verbatim(value: Enum) -> str:
    return _checked(value, value.value)


# ── Value rendering ───────────────────────────────────────────────────────────

def format_number(value: int | float) -> str:
    """
    Locale-independent number rendering: ``21.0 → "21"``, ``23.976 → "23.976"``.
    """
    if isinstance(value, bool):
        raise TypeError(f"Refusing to render a bool as a number: {value!r}")
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _render(value, separator: str = ",") -> str | None:
    """Render one option value, or None when the option should be left out."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return format_enum(value)
    if isinstance(value, (list, tuple)):
        parts = [_render(v) for v in value]
        parts = [p for p in parts if p]
        return separator.join(parts) if parts else None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return str(value) or None  # Timepoint, Preview, Encopt


# ── Option table ──────────────────────────────────────────────────────────────
#
# (attribute, flag, style)
#   "arg"    → --flag value
#   "eq"     → --flag=value
#   "flag"   → --flag            when the attribute is True
#   "switch" → --<enum token>    when the attribute is set
#   "colon"  → --flag a:b:c      list joined with ':' instead of ','

_SOURCE = (
    ("title",                    "title",              "arg"),
    ("min_duration_seconds",     "min-duration",       "arg"),
    ("scan_selected_title_only", "scan",               "flag"),
    ("main_feature",             "main-feature",       "flag"),
    ("chapters",                 "chapters",           "arg"),
    ("angle",                    "angle",              "arg"),
    ("previews",                 "previews",           "arg"),
    ("start_at_preview",         "start-at-preview",   "arg"),
    ("start_at",                 "start-at",           "arg"),
    ("stop_at",                  "stop-at",            "arg"),
)

_DESTINATION = (
    ("format",                "format",                "arg"),
    ("markers",               "markers",               "flag"),
    ("no_markers",            "no-markers",            "flag"),
    ("web_optimize",          "optimize",              "flag"),
    ("no_web_optimize",       "no-optimize",           "flag"),
    ("ipod_atom",             "ipod-atom",             "flag"),
    ("no_ipod_atom",          "no-ipod-atom",          "flag"),
    ("align_av",              "align-av",              "flag"),
    ("inline_parameter_sets", "inline-parameter-sets", "flag"),
)

_VIDEO = (
    ("encoder",            "encoder",              "arg"),
    ("encoder_preset",     "encoder-preset",       "arg"),
    ("encoder_presets",    "encoder-preset-list",  "arg"),
    ("encoder_tune",       "encoder-tune",         "arg"),
    ("encoder_tunes",      "encoder-tune-list",    "arg"),
    ("encopts",            "encopts",              "colon"),
    ("encoder_profile",    "encoder-profile",      "arg"),
    ("encoder_profiles",   "encoder-profile-list", "arg"),
    ("encoder_level",      "encoder-level",        "arg"),
    ("encoder_levels",     "encoder-level-list",   "arg"),
    ("video_quality",      "quality",              "arg"),
    ("video_bitrate",      "vb",                   "arg"),
    ("two_pass",           "two-pass",             "flag"),
    ("no_two_pass",        "no-two-pass",          "flag"),
    ("turbo",              "turbo",                "flag"),
    ("no_turbo",           "no-turbo",             "flag"),
    ("frame_rate",         "rate",                 "arg"),
    ("frame_rate_setting", None,                   "switch"),
)

_AUDIO = (
    ("audio_languages",            "audio-lang-list", "arg"),
    ("audio_tracks",               None,              "switch"),
    ("audios",                     "audio",           "arg"),
    ("audio_encoders",             "aencoder",        "arg"),
    ("audio_copy_masks",           "audio-copy-mask", "arg"),
    ("audio_fallback",             "audio-fallback",  "arg"),
    ("audio_bitrates",             "ab",              "arg"),
    ("audio_qualities",            "aq",              "arg"),
    ("audio_compressions",         "ac",              "arg"),
    ("mixdowns",                   "mixdown",         "arg"),
    ("normalize_mixes",            "normalize-mix",   "arg"),
    ("audio_sample_rates",         "arate",           "arg"),
    ("dynamic_range_compressions", "drc",             "arg"),
    ("audio_gain",                 "gain",            "arg"),
    ("audio_dithers",              "adither",         "arg"),
    ("audio_track_names",          "aname",           "arg"),
)

_PICTURE = (
    ("width",                  "width",                  "arg"),
    ("height",                 "height",                 "arg"),
    ("crop",                   "crop",                   "arg"),
    ("loose_crop",             "loose-crop",             "flag"),
    ("no_loose_crop",          "no-loose-crop",          "flag"),
    ("max_height",             "maxHeight",              "arg"),
    ("max_width",              "maxWidth",               "arg"),
    ("anamorphic",             None,                     "switch"),
    ("display_width",          "display-width",          "arg"),
    ("keep_display_aspect",    "keep-display-aspect",    "flag"),
    ("no_keep_display_aspect", "no-keep-display-aspect", "flag"),
    ("pixel_aspect",           "pixel-aspect",           "arg"),
    ("itu_par",                "itu-par",                "flag"),
    ("no_itu_par",             "no-itu-par",             "flag"),
    ("modulus",                "modulus",                "arg"),
    ("color_matrix",           "color-matrix",           "arg"),
)

_FILTERS = (
    ("comb_detect",        "comb-detect",        "eq"),
    ("no_comb_detect",     "no-comb-detect",     "flag"),
    ("deinterlace",        "deinterlace",        "eq"),
    ("no_deinterlace",     "no-deinterlace",     "flag"),
    ("decomb",             "decomb",             "eq"),
    ("no_decomb",          "no-decomb",          "flag"),
    ("detelecine",         "detelecine",         "eq"),
    ("no_detelecine",      "no-detelecine",      "flag"),
    ("hqdn3d",             "hqdn3d",             "eq"),
    ("no_hqdn3d",          "no-hqdn3d",          "flag"),
    ("nlmeans",            "nlmeans",            "eq"),
    ("no_nlmeans",         "no-nlmeans",         "flag"),
    ("nlmeans_tune",       "nlmeans-tune",       "arg"),
    ("chroma_smooth",      "chroma-smooth",      "eq"),
    ("no_chroma_smooth",   "no-chroma-smooth",   "flag"),
    ("chroma_smooth_tune", "chroma-smooth-tune", "arg"),
    ("unsharp",            "unsharp",            "eq"),
    ("no_unsharp",         "no-unsharp",         "flag"),
    ("unsharp_tune",       "unsharp-tune",       "arg"),
    ("lapsharp",           "lapsharp",           "eq"),
    ("no_lapsharp",        "no-lapsharp",        "flag"),
    ("lapsharp_tune",      "lapsharp-tune",      "arg"),
    ("deblock",            "deblock",            "eq"),
    ("no_deblock",         "no-deblock",         "flag"),
    ("deblock_tune",       "deblock-tune",       "arg"),
    ("rotate",             "rotate",             "eq"),
    ("pad",                "pad",                "arg"),
    ("colorspace",         "colorspace",         "arg"),
    ("grayscale",          "grayscale",          "flag"),
    ("no_grayscale",       "no-grayscale",       "flag"),
)

_SUBTITLES = (
    ("subtitle_languages", "subtitle-lang-list", "arg"),
    ("all_subtitles",      "all-subtitles",      "flag"),
    ("first_subtitle",     "first-subtitle",     "flag"),
    ("subtitles",          "subtitle",           "arg"),
    ("subtitle_names",     "subname",            "arg"),
    ("subtitles_forced",   "subtitle-forced",    "eq"),
    ("subtitle_burned",    "subtitle-burned",    "eq"),
    ("subtitle_default",   "subtitle-default",   "eq"),
    ("native_language",    "native-language",    "arg"),
    ("native_dub",         "native-dub",         "flag"),
    ("srt_files",          "srt-file",           "arg"),
    ("srt_codesets",       "srt-codeset",        "arg"),
    ("srt_offsets",        "srt-offset",         "arg"),
    ("srt_languages",      "srt-lang",           "arg"),
    ("srt_default",        "srt-default",        "eq"),
    ("srt_burn",           "srt-burn",           "eq"),
    ("ssa_files",          "ssa-file",           "arg"),
    ("ssa_offsets",        "ssa-offset",         "arg"),
    ("ssa_languages",      "ssa-lang",           "arg"),
    ("ssa_default",        "ssa-default",        "eq"),
    ("ssa_burn",           "ssa-burn",           "eq"),
)

OPTION_GROUPS = (
    ("source",      _SOURCE),
    ("destination", _DESTINATION),
    ("video",       _VIDEO),
    ("audio",       _AUDIO),
    ("picture",     _PICTURE),
    ("filters",     _FILTERS),
    ("subtitles",   _SUBTITLES),
)


# ── Public API ────────────────────────────────────────────────────────────────

def build_arguments(config: HandbrakeConfiguration) -> list[str]:
    """
    Turn *config* into the ordered HandBrakeCLI option list.

    Example (defaults):
        ['--format', 'av_mp4', '--encoder', 'x264', '--encoder-level', '4.0',
         '--quality', '21', '--rate', '30', '--pfr', '--first-audio',
         '--aencoder', 'copy:aac', '--audio-copy-mask', 'aac', ...]
    """
    args: list[str] = []
    for _group, options in OPTION_GROUPS:
        for attribute, flag, style in options:
            value = getattr(config, attribute)

            if style == "flag":
                if value is True:
                    args.append(f"--{flag}")
                continue

            if style == "switch":
                if value is not None:
                    args.append(f"--{format_enum(value)}")
                continue

            rendered = _render(value, ":" if style == "colon" else ",")
            if rendered is None:
                continue
            if style == "eq":
                args.append(f"--{flag}={rendered}")
            else:
                args.extend((f"--{flag}", rendered))
    return args


def serialize_configuration(config: HandbrakeConfiguration) -> str:
    """The option list as one quoted string, e.g. for logs or a terminal."""
    return shlex.join(build_arguments(config))


def build_transcode_command(
    executable: Path,
    input_file: Path,
    output_file: Path,
    config: HandbrakeConfiguration,
) -> list[str]:
    """
    Build the full HandBrakeCLI command for transcoding one file.

    The command structure is:
        HandBrakeCLI
          -i <input>
          -o <output>
          <configuration options>    ← see OPTION_GROUPS for the order
    """
    return [
        str(executable),
        "-i", str(input_file),
        "-o", str(output_file),
        *build_arguments(config),
    ]


def command_as_string(cmd: list[str]) -> str:
    """Human-readable version of the command for logging."""
    return shlex.join(cmd)
