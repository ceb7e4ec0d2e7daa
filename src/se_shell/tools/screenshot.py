"""
Screenshot Tools

Capture the page or a single element. WebDriver only produces PNG; other
formats are converted with Pillow.
"""

import base64
from io import BytesIO
from pathlib import Path
from typing import Literal, Optional

from PIL import Image

from ..driver.session import DriverSession
from ..errors import CommandError
from .base import tool, to_thread, ToolResult

ImageFormat = Literal["png", "jpeg", "gif", "bmp", "tiff"]

IMAGE_FORMATS = ("png", "jpeg", "gif", "bmp", "tiff")

SUFFIX_FORMATS = {
    ".png": "png",
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".gif": "gif",
    ".bmp": "bmp",
    ".tif": "tiff",
    ".tiff": "tiff",
}


def format_for_path(path: str) -> str:
    """Infer the image format from a file suffix (png when unknown)."""
    return SUFFIX_FORMATS.get(Path(path).suffix.lower(), "png")


def convert_png(png_bytes: bytes, image_format: str) -> bytes:
    """
    Convert PNG bytes to another format.

    Args:
        png_bytes: PNG image from the driver
        image_format: Target format (one of IMAGE_FORMATS)

    Returns:
        Encoded image bytes
    """
    if image_format not in IMAGE_FORMATS:
        raise CommandError(f"Unsupported image format '{image_format}'")
    if image_format == "png":
        return png_bytes

    with Image.open(BytesIO(png_bytes)) as img:
        # JPEG and BMP have no alpha channel
        if image_format in ("jpeg", "bmp") and img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        output = BytesIO()
        img.save(output, format=image_format.upper())
        return output.getvalue()


@tool(
    name="screenshot",
    description="Take a screenshot of the page or a stored element. Returns base64 data, or saves to --path.",
    parameters={
        "type": "object",
        "properties": {
            "element": {"type": "string", "description": "Stored element id to capture"},
            "path": {"type": "string", "description": "File to write (format inferred from suffix)"},
            "format": {
                "type": "string",
                "description": "Image format (default: png, or from --path suffix)",
                "enum": list(IMAGE_FORMATS),
            },
        },
    },
)
async def screenshot(
    session: DriverSession,
    element: Optional[str] = None,
    path: Optional[str] = None,
    format: Optional[ImageFormat] = None,
) -> ToolResult:
    """
    Take a screenshot.

    Args:
        session: Driver session
        element: Stored element id (whole viewport when None)
        path: File path to save to
        format: Image format

    Returns:
        ToolResult with the saved path, or base64-encoded image data
    """
    image_format = format or (format_for_path(path) if path else "png")

    if element:
        target = session.elements.resolve(element)
        png_bytes = await to_thread(lambda: target.screenshot_as_png)
    else:
        png_bytes = await to_thread(session.driver.get_screenshot_as_png)

    image_bytes = await to_thread(convert_png, png_bytes, image_format)
    metadata = {"element": element, "format": image_format}

    if path:
        target_path = Path(path)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_bytes(image_bytes)
        return ToolResult(
            success=True,
            data={
                "path": str(target_path.absolute()),
                "size_bytes": len(image_bytes),
            },
            metadata=metadata,
        )

    return ToolResult(
        success=True,
        data={
            "base64": base64.b64encode(image_bytes).decode("utf-8"),
            "mime_type": f"image/{image_format}",
            "size_bytes": len(image_bytes),
        },
        metadata=metadata,
    )
