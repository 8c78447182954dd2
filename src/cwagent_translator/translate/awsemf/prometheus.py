# src/cwagent_translator/translate/awsemf/prometheus.py
"""
Declarações e descritores de métricas para scrape Prometheus.

Não existe template fixo: as declarações vêm de
`prometheus.emf_processor.metric_declaration`, repassadas sem alteração
(dimensões, seletores e label matcher opcional).

Fallbacks:
    - nenhuma declaração válida → uma única declaração com o seletor
      `$^`, que não casa com nenhum nome de métrica ("configurado, mas
      sem dados" em vez de "mal configurado")
    - nenhum override de unidade → `metric_descriptors` é None, não lista vazia

Entradas malformadas (declaração que não é mapa, campos com tipo
inesperado) são ignoradas com warning: a derivação não falha.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence

from cwagent_translator.core.pipeline.types import LabelMatcher, MetricDeclaration, MetricDescriptor
from .common import EMF_PROCESSOR_KEY, get_mapping, get_path, get_string

if TYPE_CHECKING:
    from cwagent_translator.core.pipeline.context import TranslationContext

MATCH_NOTHING_SELECTOR = "$^"
DEFAULT_NAMESPACE = "CWAgent/Prometheus"
DEFAULT_LOG_STREAM_NAME = "{JobName}"


@dataclass(frozen=True)
class PrometheusScrapeConfig:
    """
    Visão tipada da seção `logs.metrics_collected.prometheus`.

    `metric_declarations` mantém as entradas brutas do usuário;
    `metric_units` é None quando o mapa não foi informado.
    """
    log_group_name: str = ""
    log_stream_name: str = DEFAULT_LOG_STREAM_NAME
    has_emf_processor: bool = False
    metric_namespace: str = ""
    metric_declarations: Sequence[Any] = ()
    metric_units: Optional[Mapping[str, Any]] = None


def parse_prometheus_section(
    section: Optional[Mapping[str, Any]],
    ctx: Optional["TranslationContext"] = None,
    path: str = "",
) -> PrometheusScrapeConfig:
    section = section or {}
    emf = get_mapping(section, (EMF_PROCESSOR_KEY,))

    declarations: Sequence[Any] = ()
    units: Optional[Mapping[str, Any]] = None
    namespace = ""
    if emf is not None:
        namespace = get_string(emf, ("metric_namespace",), DEFAULT_NAMESPACE) or DEFAULT_NAMESPACE
        raw = get_path(emf, ("metric_declaration",))
        if isinstance(raw, (list, tuple)):
            declarations = raw
        elif raw is not None:
            _warn(ctx, path, "metric_declaration deve ser uma lista; ignorado")
        units = get_mapping(emf, ("metric_unit",))

    return PrometheusScrapeConfig(
        log_group_name=get_string(section, ("log_group_name",)),
        log_stream_name=get_string(section, ("log_stream_name",), DEFAULT_LOG_STREAM_NAME),
        has_emf_processor=emf is not None,
        metric_namespace=namespace,
        metric_declarations=declarations,
        metric_units=units,
    )


def prometheus_metric_declarations(
    scrape: PrometheusScrapeConfig,
    ctx: Optional["TranslationContext"] = None,
    path: str = "",
) -> List[MetricDeclaration]:
    declarations: List[MetricDeclaration] = []
    for index, entry in enumerate(scrape.metric_declarations):
        declaration = _declaration_from_entry(entry, ctx, path, index)
        if declaration is None:
            _warn(ctx, path, f"metric_declaration[{index}] inválida; ignorada")
            continue
        declarations.append(declaration)

    if not declarations:
        return [MetricDeclaration(metric_name_selectors=[MATCH_NOTHING_SELECTOR])]
    return declarations


def prometheus_metric_descriptors(
    scrape: PrometheusScrapeConfig,
    ctx: Optional["TranslationContext"] = None,
    path: str = "",
) -> Optional[List[MetricDescriptor]]:
    if not scrape.metric_units:
        return None

    descriptors: List[MetricDescriptor] = []
    for metric_name in sorted(scrape.metric_units):
        unit = scrape.metric_units[metric_name]
        if not isinstance(unit, str):
            _warn(ctx, path, f"metric_unit de {metric_name!r} deve ser string; ignorado")
            continue
        descriptors.append(MetricDescriptor(metric_name=metric_name, unit=unit))
    return descriptors or None


def _declaration_from_entry(
    entry: Any,
    ctx: Optional["TranslationContext"] = None,
    path: str = "",
    index: int = 0,
) -> Optional[MetricDeclaration]:
    if not isinstance(entry, Mapping):
        return None

    dimensions = _string_matrix(entry.get("dimensions", []))
    selectors = _string_list(entry.get("metric_selectors", []))
    if dimensions is None or selectors is None:
        return None

    return MetricDeclaration(
        dimensions=dimensions,
        metric_name_selectors=selectors,
        label_matchers=_label_matchers(entry, ctx, path, index),
    )


def _label_matchers(
    entry: Mapping[str, Any],
    ctx: Optional["TranslationContext"],
    path: str,
    index: int,
) -> Optional[List[LabelMatcher]]:
    raw_labels = entry.get("source_labels")
    regex = entry.get("label_matcher")

    source_labels = _string_list(raw_labels)
    if raw_labels is not None and source_labels is None:
        _warn(ctx, path, f"metric_declaration[{index}].source_labels deve ser lista de strings; label matcher ignorado")
        return None
    if regex is not None and not isinstance(regex, str):
        _warn(ctx, path, f"metric_declaration[{index}].label_matcher deve ser string; label matcher ignorado")
        return None

    if source_labels and regex:
        return [LabelMatcher(label_names=source_labels, regex=regex)]
    return None


def _string_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, (list, tuple)):
        return None
    if not all(isinstance(v, str) for v in value):
        return None
    return list(value)


def _string_matrix(value: Any) -> Optional[List[List[str]]]:
    if not isinstance(value, (list, tuple)):
        return None
    rows: List[List[str]] = []
    for row in value:
        strings = _string_list(row)
        if strings is None:
            return None
        rows.append(strings)
    return rows


def _warn(ctx: Optional["TranslationContext"], path: str, message: str) -> None:
    if ctx is not None:
        ctx.add_warning(section=path, message=message)
