"""Display name composition."""

DEFAULT_VARIANT_TITLE = "default title"


def build_display_name(vendor: str, product_title: str, variant_title: str) -> str:
    """
    "Pure NMN (60 Capsules)" from title and variant.

    A leading vendor-name prefix is stripped case-insensitively, unless
    that would leave nothing.
    """
    name = product_title
    if variant_title and variant_title.lower() != DEFAULT_VARIANT_TITLE:
        name = f"{name} ({variant_title})"

    if vendor and name.lower().startswith(vendor.lower()):
        remainder = name[len(vendor):].lstrip()
        if remainder:
            name = remainder
    return name
