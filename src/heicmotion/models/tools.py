"""External tool availability model."""

from pydantic import BaseModel, ConfigDict


class ToolAvailability(BaseModel):
    """Resolved executable paths for every external tool.

    Built once before any file is processed and shared read-only by all
    per-file work. A ``None`` path means the tool is absent.
    """

    model_config = ConfigDict(frozen=True)

    exiftool: str | None = None
    ffmpeg: str | None = None
    ffprobe: str | None = None
    imagemagick: str | None = None
    heif_convert: str | None = None
    # True when ``imagemagick`` is the IM7 ``magick`` binary rather than legacy ``convert``
    imagemagick_is_magick: bool = False

    # Logical roles
    @property
    def metadata_reader(self) -> str | None:
        return self.exiftool

    @property
    def raster_converter(self) -> str | None:
        return self.imagemagick

    @property
    def heif_decoder(self) -> str | None:
        return self.heif_convert

    @property
    def video_frame_extractor(self) -> str | None:
        return self.ffmpeg

    @property
    def video_encoder(self) -> str | None:
        return self.ffmpeg

    @property
    def video_prober(self) -> str | None:
        return self.ffprobe

    def as_status(self) -> dict[str, bool | str]:
        """Return a name -> availability map for display."""
        imagemagick: bool | str = False
        if self.imagemagick:
            imagemagick = "magick" if self.imagemagick_is_magick else "convert"
        return {
            "exiftool": bool(self.exiftool),
            "ffmpeg": bool(self.ffmpeg),
            "ffprobe": bool(self.ffprobe),
            "imagemagick": imagemagick,
            "heif-convert": bool(self.heif_convert),
        }
