"""
Image Tools

Tools:
  generate_image  — text-to-image through Hugging Face inference
"""

from typing import Any, Dict, List

from toolhub.core import schema
from toolhub.core.context import ServerContext
from toolhub.core.envelope import Failure, ImageResult
from toolhub.core.registry import ToolDescriptor
from toolhub.server.logger import get_logger
from toolhub.tools.http import post_bytes

log = get_logger("tools.image")

NUM_INFERENCE_STEPS = 4


async def _generate_image(ctx: ServerContext, args: Dict[str, Any]):
    if not ctx.hf_token:
        return Failure(
            "Hugging Face token is not configured. Set the HF_TOKEN environment "
            f"variable or create {ctx.config.HF_TOKEN_FILE}."
        )

    url = f"{ctx.config.HF_URL.rstrip('/')}/{ctx.config.HF_MODEL}"
    data, content_type = await post_bytes(
        ctx.http,
        url,
        payload={
            "inputs": args["prompt"],
            "parameters": {"num_inference_steps": NUM_INFERENCE_STEPS},
        },
        headers={
            "Authorization": f"Bearer {ctx.hf_token}",
            "Accept": "image/png",
        },
    )
    if not data:
        return Failure("Inference API returned an empty image")

    media_type = content_type if content_type.startswith("image/") else "image/png"
    log.info(f"Generated {len(data)} bytes ({media_type}) with {ctx.config.HF_MODEL}")
    return ImageResult(data, media_type)


TOOLS: List[ToolDescriptor] = [
    ToolDescriptor(
        name="generate_image",
        description="Generates an image from a text prompt (FLUX.1-schnell model).",
        input_shape=schema.Shape({
            "prompt": schema.string(
                'Description of the image to generate, e.g. "Astronaut riding a horse"'
            ),
        }),
        handler=_generate_image,
        output_description="base64-encoded image (image/png)",
    ),
]
