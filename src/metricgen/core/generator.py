"""
Code generation from a metric catalog.

The derivation functions, the literal serializer and the casing transforms
are registered as Jinja2 filters; the catalog is the template's only input
(``categories``). Any failure aborts the whole render: a half-generated
source file is never returned.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jinja2

from metricgen.core import derivation
from metricgen.core.casing import lower_camel, upper_camel
from metricgen.core.catalog import Catalog
from metricgen.core.errors import MetricgenError, TemplateError
from metricgen.core.literals import SWIFT, LiteralPolicy, serialize
from metricgen.core.logging_config import get_logger
from metricgen.core.metrics import Metric

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True)
class TargetLanguage:
    """A code generation target: its template and literal rules."""

    name: str
    template: str
    policy: LiteralPolicy
    extension: str


TARGETS: Dict[str, TargetLanguage] = {
    "swift": TargetLanguage(
        name="swift",
        template="swift/metrics.jinja2",
        policy=SWIFT,
        extension=".swift",
    ),
}

DEFAULT_TARGET = "swift"


def get_target(name: str) -> TargetLanguage:
    """Look up a target language by name.

    Raises:
        TemplateError: no such target
    """
    try:
        return TARGETS[name]
    except KeyError:
        raise TemplateError(
            f"Unknown target language {name!r} (available: {', '.join(sorted(TARGETS))})"
        ) from None


def build_environment(
    target: TargetLanguage,
    template_dir: Optional[Union[str, Path]] = None,
) -> jinja2.Environment:
    """Build the Jinja2 environment for a target.

    Templates are looked up in ``template_dir`` first (when given), then in
    the bundled templates directory.
    """
    search_path: List[str] = []
    if template_dir is not None:
        search_path.append(str(template_dir))
    search_path.append(str(TEMPLATES_DIR))

    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(search_path),
        undefined=jinja2.StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    policy = target.policy

    def common_fields(metric: Metric, category: str, name: str) -> Dict[str, str]:
        return derivation.common_fields(metric, category, name, policy)

    def extra_fields(
        metric: Metric,
        category: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Dict[str, str]:
        qualified = f"{category}.{name}" if category and name else None
        return derivation.extra_fields(metric, policy, qualified)

    def literal(value: Any) -> str:
        return serialize(value, policy)

    env.filters["Camelize"] = upper_camel
    env.filters["camelize"] = lower_camel
    env.filters["type_name"] = derivation.type_name
    env.filters["common_fields"] = common_fields
    env.filters["extra_fields"] = extra_fields
    env.filters["identifier"] = policy.identifier
    env.filters["literal"] = literal
    env.filters[target.name] = literal
    return env


def render_catalog(
    catalog: Catalog,
    target: str = DEFAULT_TARGET,
    template_dir: Optional[Union[str, Path]] = None,
) -> str:
    """Render a catalog to source code for a target language.

    Args:
        catalog: Decoded metric catalog
        target: Target language name (see TARGETS)
        template_dir: Optional directory searched before the bundled templates

    Returns:
        Generated source text

    Raises:
        TemplateError: unknown target, missing template or Jinja2 failure
        SerializationFault: a metric value has no literal form
    """
    language = get_target(target)
    env = build_environment(language, template_dir)

    try:
        template = env.get_template(language.template)
    except jinja2.TemplateNotFound as exc:
        raise TemplateError(
            f"Template not found: {language.template}", template=language.template
        ) from exc
    except jinja2.TemplateError as exc:
        raise TemplateError(
            f"Cannot load template {language.template}: {exc}", template=language.template
        ) from exc

    try:
        output = template.render(categories=catalog)
    except MetricgenError:
        raise
    except jinja2.TemplateError as exc:
        raise TemplateError(
            f"Rendering {language.template} failed: {exc}", template=language.template
        ) from exc
    except Exception as exc:
        # Filters called with the wrong arguments from an override template
        raise TemplateError(
            f"Rendering {language.template} failed: {exc}", template=language.template
        ) from exc

    logger.debug(
        "Rendered %d metric(s) with %s (%d bytes)",
        catalog.metric_count,
        language.template,
        len(output),
    )
    return output
