"""
hbwrapper.configuration
~~~~~~~~~~~~~~~~~~~~~~~
The encoding configuration handed to HandBrakeCLI. Pure dataclasses,
no I/O.

Every field maps to exactly one HandBrakeCLI option (see the ordered table
in ``command_builder``). Conventions:

  - ``None``, ``""`` and ``[]`` mean "leave the option out"
  - ``bool | None`` flags are emitted only when ``True``; enable/disable
    pairs (``web_optimize`` / ``no_web_optimize``) are not checked
    against each other, HandBrakeCLI does its own validation
  - list fields become one comma-joined option (one entry per audio track,
    subtitle, ...)

Reference: https://handbrake.fr/docs/en/latest/cli/command-line-reference.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields

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


# ── Value objects ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Timepoint:
    """A position in the source, e.g. ``Timepoint(TimeUnit.DURATION, 90)``."""
    unit: TimeUnit
    value: float

    def __str__(self) -> str:
        value = int(self.value) if float(self.value).is_integer() else self.value
        return f"{self.unit.value}:{value}"


@dataclass(frozen=True)
class Preview:
    """How many preview images to generate and whether to keep them."""
    count: int
    store_to_disk: bool = False

    def __str__(self) -> str:
        return f"{self.count}:{int(self.store_to_disk)}"


@dataclass(frozen=True)
class Encopt:
    """One advanced encoder option, rendered as ``name=value``."""
    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


# ── Configuration ─────────────────────────────────────────────────────────────

@dataclass
class HandbrakeConfiguration:
    """
    Everything HandBrakeCLI needs to know about one conversion,
    apart from the input and output paths.

    ``HandbrakeConfiguration()`` carries sensible defaults for an H.264 MP4
    with AAC passthrough; ``HandbrakeConfiguration.without_defaults()``
    leaves every option unset except the container.
    """

    # Source
    title: int | None = None
    min_duration_seconds: int | None = None
    scan_selected_title_only: bool | None = None
    main_feature: bool | None = None
    chapters: list[str] = field(default_factory=list)
    angle: int | None = None
    previews: Preview | None = None
    start_at_preview: int | None = None
    start_at: Timepoint | None = None
    stop_at: Timepoint | None = None

    # Destination
    format: Format = Format.AV_MP4
    markers: bool | None = None
    no_markers: bool | None = None
    web_optimize: bool | None = None
    no_web_optimize: bool | None = None
    ipod_atom: bool | None = None
    no_ipod_atom: bool | None = None
    align_av: bool | None = None
    inline_parameter_sets: bool | None = None

    # Video
    encoder: VideoEncoder | None = VideoEncoder.X264
    encoder_preset: str | None = None
    encoder_presets: list[str] = field(default_factory=list)
    encoder_tune: str | None = None
    encoder_tunes: list[str] = field(default_factory=list)
    encopts: list[Encopt] = field(default_factory=list)
    encoder_profile: str | None = None
    encoder_profiles: list[str] = field(default_factory=list)
    encoder_level: EncoderLevel | None = EncoderLevel.L4_0
    encoder_levels: list[EncoderLevel] = field(default_factory=list)
    video_quality: float | None = 21
    video_bitrate: int | None = None        # kbit/s
    two_pass: bool | None = None
    no_two_pass: bool | None = None
    turbo: bool | None = None
    no_turbo: bool | None = None
    frame_rate: float | None = 30
    frame_rate_setting: FrameRateSetting | None = FrameRateSetting.PFR

    # Audio
    audio_languages: list[str] = field(default_factory=list)
    audio_tracks: AudioTracks | None = AudioTracks.FIRST_AUDIO
    audios: list[str] = field(default_factory=list)
    audio_encoders: list[AudioEncoder] = field(
        default_factory=lambda: [AudioEncoder.COPY_AAC]
    )
    audio_copy_masks: list[AudioCopyMask] = field(
        default_factory=lambda: [AudioCopyMask.AAC]
    )
    audio_fallback: AudioEncoder | None = AudioEncoder.AV_AAC
    audio_bitrates: list[int] = field(default_factory=lambda: [320])
    audio_qualities: list[float] = field(default_factory=list)
    audio_compressions: list[float] = field(default_factory=list)
    mixdowns: list[Mixdown] = field(
        default_factory=lambda: [Mixdown.SURROUND_5_1]
    )
    normalize_mixes: list[str] = field(default_factory=list)
    audio_sample_rates: list[AudioSampleRate] = field(
        default_factory=lambda: [AudioSampleRate.AUTO]
    )
    dynamic_range_compressions: list[float] = field(default_factory=list)
    audio_gain: float | None = 0
    audio_dithers: list[AudioDither] = field(default_factory=list)
    audio_track_names: list[str] = field(default_factory=list)

    # Picture
    width: int | None = None
    height: int | None = None
    crop: str | None = None               # "top:bottom:left:right"
    loose_crop: bool | None = None
    no_loose_crop: bool | None = None
    max_height: int | None = None
    max_width: int | None = None
    anamorphic: Anamorphic | None = Anamorphic.LOOSE_ANAMORPHIC
    display_width: int | None = None
    keep_display_aspect: bool | None = None
    no_keep_display_aspect: bool | None = None
    pixel_aspect: str | None = None       # "x:y"
    itu_par: bool | None = None
    no_itu_par: bool | None = None
    modulus: int | None = 2
    color_matrix: ColorMatrix | None = None

    # Filters
    comb_detect: str | None = None
    no_comb_detect: bool | None = None
    deinterlace: str | None = None
    no_deinterlace: bool | None = None
    decomb: str | None = None
    no_decomb: bool | None = None
    detelecine: str | None = None
    no_detelecine: bool | None = None
    hqdn3d: str | None = None
    no_hqdn3d: bool | None = None
    nlmeans: str | None = None
    no_nlmeans: bool | None = None
    nlmeans_tune: NlmeansTune | None = None
    chroma_smooth: str | None = None
    no_chroma_smooth: bool | None = None
    chroma_smooth_tune: ChromaSmoothTune | None = None
    unsharp: str | None = None
    no_unsharp: bool | None = None
    unsharp_tune: UnsharpTune | None = None
    lapsharp: str | None = None
    no_lapsharp: bool | None = None
    lapsharp_tune: LapsharpTune | None = None
    deblock: str | None = None
    no_deblock: bool | None = None
    deblock_tune: DeblockTune | None = None
    rotate: str | None = None
    pad: str | None = None
    colorspace: str | None = None
    grayscale: bool | None = None
    no_grayscale: bool | None = None

    # Subtitles
    subtitle_languages: list[str] = field(default_factory=list)
    all_subtitles: bool | None = None
    first_subtitle: bool | None = None
    subtitles: list[str] = field(default_factory=list)
    subtitle_names: list[str] = field(default_factory=list)
    subtitles_forced: list[str] = field(default_factory=list)
    subtitle_burned: str | None = None
    subtitle_default: str | None = None
    native_language: str | None = None
    native_dub: bool | None = None
    srt_files: list[str] = field(default_factory=list)
    srt_codesets: list[str] = field(default_factory=list)
    srt_offsets: list[str] = field(default_factory=list)
    srt_languages: list[str] = field(default_factory=list)
    srt_default: int | None = None
    srt_burn: int | None = None
    ssa_files: list[str] = field(default_factory=list)
    ssa_offsets: list[str] = field(default_factory=list)
    ssa_languages: list[str] = field(default_factory=list)
    ssa_default: int | None = None
    ssa_burn: int | None = None

    @classmethod
    def without_defaults(cls, format: Format = Format.AV_MP4) -> HandbrakeConfiguration:
        """A configuration with every option unset, so only *format* is emitted."""
        template = cls()
        blank = {
            f.name: ([] if isinstance(getattr(template, f.name), list) else None)
            for f in fields(cls)
            if f.name != "format"
        }
        return cls(format=format, **blank)
