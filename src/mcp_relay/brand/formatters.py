"""Formatting for brand guideline responses."""
import yaml

from .schemas import BrandGuidelinesConfig


def format_brand_guidelines(config: BrandGuidelinesConfig) -> str:
    """Render guidelines as readable YAML under a project header."""
    if not config.guidelines:
        return f"Brand guidelines for {config.project_id}\n\nNo guidelines defined."

    body = yaml.safe_dump(
        config.guidelines,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    ).rstrip()
    return f"Brand guidelines for {config.project_id}\n\n{body}"
