from typing import Dict, Iterable, Optional


PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/400x300?text=No+Image"


def select_display_image(images: Optional[Iterable[Dict]], placeholder: str = PLACEHOLDER_IMAGE_URL) -> str:
    """Primary image, else the first image, else the placeholder."""
    images = [image for image in (images or []) if image.get("image_url")]
    for image in images:
        if image.get("is_primary"):
            return image["image_url"]
    if images:
        return images[0]["image_url"]
    return placeholder
