# analysis_core.py: prompt assembly + LLM call for the policy analysis page
import os
import re
import json
import math
from typing import List, Dict, Any, Optional, Tuple

from langchain_openai import ChatOpenAI

from prompts import (
    AUDIENCE_DESCRIPTIONS,
    DEFAULT_AUDIENCE,
    CHART_IFRAME,
    BUDGET_FOCUS,
    DECILE_FOCUS,
    POVERTY_FOCUS,
    SPELLING,
    MICRODATA,
    POVERTY_MEASURE,
    DEFAULT_SPELLING,
    DEFAULT_MICRODATA,
    DEFAULT_POVERTY_MEASURE,
    POLICY_DETAILS_PROMPT,
    IMPACT_DESCRIPTION_PROMPT,
)

APP_URL = os.getenv("POLICYENGINE_APP_URL", "https://policyengine.org").rstrip("/")

# -----------------------------
# LLM
# -----------------------------
def get_llm():
    kwargs = {"model": os.getenv("MODEL_CHOICE", "gpt-4")}
    temperature = os.getenv("TEMPERATURE")
    if temperature:
        kwargs["temperature"] = float(temperature)
    return ChatOpenAI(**kwargs)


def generate_analysis(prompt: str, llm=None) -> str:
    """Single user-message chat completion; provider errors propagate."""
    llm = llm or get_llm()
    resp = llm.invoke([{"role": "user", "content": prompt}])
    return resp.content

# -----------------------------
# Parameters
# -----------------------------
def parameter_at_instant(parameter: Dict[str, Any], instant: str):
    """Value in force on `instant` (YYYY-MM-DD): latest start date <= instant."""
    values = parameter.get("values") or {}
    value = None
    for date in sorted(values):
        if date > instant:
            break
        value = values[date]
    return value


def relevant_parameters(metadata: Dict[str, Any], policy: Dict[str, Any]) -> List[Dict[str, Any]]:
    known = metadata.get("parameters", {})
    reform_data = policy.get("reform", {}).get("data") or {}
    return [known[name] for name in reform_data if name in known]


def baseline_parameter_values(parameters: List[Dict[str, Any]], time_period) -> List[Dict[str, Any]]:
    instant = f"{time_period}-01-01"
    return [{p["parameter"]: parameter_at_instant(p, instant)} for p in parameters]


def region_label(metadata: Dict[str, Any], region: str) -> str:
    options = metadata.get("economy_options", {}).get("region", [])
    labels = {o["name"]: o["label"] for o in options}
    return labels.get(region, region)

# -----------------------------
# Charts
# -----------------------------
def results_url(metadata: Dict[str, Any], version: str, region: str, time_period, policy: Dict[str, Any]) -> str:
    return (
        f"{APP_URL}/{metadata['countryId']}/policy?version={version}&region={region}"
        f"&timePeriod={time_period}&reform={policy['reform']['id']}"
        f"&baseline={policy['baseline']['id']}&embed=True"
    )


def chart_iframe(base_url: str, focus: str) -> str:
    return CHART_IFRAME.format(src=f"{base_url}&focus={focus}")

# -----------------------------
# Prompt
# -----------------------------
def _js_numbers(obj):
    # JSON.stringify writes 3.0 as 3 and NaN/Infinity as null
    if isinstance(obj, float):
        if not math.isfinite(obj):
            return None
        return int(obj) if obj.is_integer() else obj
    if isinstance(obj, dict):
        return {k: _js_numbers(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_js_numbers(v) for v in obj]
    return obj


def _to_json(obj) -> str:
    # Same shape as JSON.stringify: compact, non-ASCII kept
    return json.dumps(_js_numbers(obj), separators=(",", ":"), ensure_ascii=False)


def build_prompt(
    impact: Dict[str, Any],
    policy_label: str,
    metadata: Dict[str, Any],
    policy: Dict[str, Any],
    region: str,
    time_period,
    audience: str = DEFAULT_AUDIENCE,
    version: Optional[str] = None,
) -> str:
    if audience not in AUDIENCE_DESCRIPTIONS:
        raise ValueError(f"Unknown audience {audience!r}; expected one of {list(AUDIENCE_DESCRIPTIONS)}")

    country = metadata["countryId"]
    version = version or metadata.get("version", "")
    parameters = relevant_parameters(metadata, policy)
    base_url = results_url(metadata, version, region, time_period, policy)
    currency = metadata.get("currency", "")

    details = POLICY_DETAILS_PROMPT.format(
        time_period=time_period,
        region_label=region_label(metadata, region),
        currency=currency,
        spelling=SPELLING.get(country, DEFAULT_SPELLING),
        country_upper=country.upper(),
        version=version,
        microdata=MICRODATA.get(country, DEFAULT_MICRODATA),
        poverty_measure=POVERTY_MEASURE.get(country, DEFAULT_POVERTY_MEASURE),
        budget_iframe=chart_iframe(base_url, BUDGET_FOCUS),
        decile_iframe=chart_iframe(base_url, DECILE_FOCUS),
        poverty_iframe=chart_iframe(base_url, POVERTY_FOCUS),
        baseline_values=_to_json(baseline_parameter_values(parameters, time_period)),
        policy=_to_json(policy),
    )

    poverty = impact.get("poverty", {})
    description = IMPACT_DESCRIPTION_PROMPT.format(
        policy_label=policy_label,
        parameters=_to_json(parameters),
        budget=_to_json(impact.get("budget")),
        intra_decile=_to_json(impact.get("intra_decile")),
        decile=_to_json(impact.get("decile")),
        poverty=_to_json(poverty.get("poverty")),
        deep_poverty=_to_json(poverty.get("deep_poverty")),
        poverty_by_gender=_to_json(impact.get("poverty_by_gender")),
        inequality=_to_json(impact.get("inequality")),
    )

    return details + description + AUDIENCE_DESCRIPTIONS[audience]


def prompt_lines(prompt: str) -> List[str]:
    return prompt.split("\n")

# -----------------------------
# Rendering helpers
# -----------------------------
_IFRAME_RE = re.compile(r"<iframe\b([^>]*)>\s*(?:</iframe>)?", re.IGNORECASE)
_ATTR_RE = re.compile(r'(\w+)\s*=\s*"([^"]*)"')


def split_analysis(markdown: str) -> List[Tuple[str, Any]]:
    """
    Split model output into ("markdown", text) and ("iframe", {"src", "height"}) segments,
    in order. Empty markdown between embeds is dropped.
    """
    segments: List[Tuple[str, Any]] = []
    pos = 0
    for m in _IFRAME_RE.finditer(markdown or ""):
        before = markdown[pos:m.start()].strip()
        if before:
            segments.append(("markdown", before))
        attrs = dict(_ATTR_RE.findall(m.group(1)))
        if attrs.get("src"):
            height = attrs.get("height", "400")
            segments.append(("iframe", {
                "src": attrs["src"],
                "height": int(height) if height.isdigit() else 400,
            }))
        pos = m.end()
    rest = (markdown or "")[pos:].strip()
    if rest:
        segments.append(("markdown", rest))
    return segments


_DOLLAR_RE = re.compile(r"(?<!\\)\$")


def escape_dollars(markdown: str) -> str:
    """Escape bare `$` so Streamlit doesn't read "$3.1 billion ... $300 million" as LaTeX."""
    return _DOLLAR_RE.sub(r"\\$", markdown)


def generate_button_label(has_clicked_generate: bool, loading: bool) -> str:
    if not has_clicked_generate:
        return "Generate an analysis"
    if loading:
        return "Generating"
    return "Regenerate analysis"


def reform_provisions(metadata: Dict[str, Any], policy: Dict[str, Any], time_period) -> List[Dict[str, Any]]:
    """Rows of (parameter, label, baseline value, reform value) for the provisions table."""
    instant = f"{time_period}-01-01"
    rows = []
    reform_data = policy.get("reform", {}).get("data") or {}
    for p in relevant_parameters(metadata, policy):
        name = p["parameter"]
        reform_value = None
        for period in sorted(reform_data.get(name, {})):
            start, _, end = period.partition(".")
            if start <= instant and (not end or instant <= end):
                reform_value = reform_data[name][period]
        rows.append({
            "parameter": name,
            "label": p.get("label", name),
            "baseline": parameter_at_instant(p, instant),
            "reform": reform_value,
        })
    return rows
