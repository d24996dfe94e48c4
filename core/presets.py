# core/presets.py

STREAM_COPY = "-c copy"

# selector → ffmpeg codec fragment, inserted verbatim after the input
CODEC_PRESETS: dict[str, str] = {
    "copy": STREAM_COPY,
    "h264": "-c:v libx264 -pix_fmt yuv420p -c:a aac",
    "h265": "-c:v libx265 -pix_fmt yuv420p -tag:v hvc1 -c:a aac",
}

OUTPUT_FORMATS = ["mp4", "mkv", "mov"]
