# policyengine_api.py: fetch simulation output from the PolicyEngine API (+ CLI)
import os
import sys
import time
import argparse
import pathlib
from typing import Dict, Any, Optional
from dotenv import load_dotenv
load_dotenv()

import requests

API_URL = os.getenv("POLICYENGINE_API_URL", "https://api.policyengine.org").rstrip("/")
UA = {"User-Agent": "Mozilla/5.0 (PolicyEngine-Analysis; +https://policyengine.org)"}

COUNTRY_CURRENCY = {"uk": "£", "us": "$", "ca": "$", "ng": "₦", "il": "₪"}


class PolicyEngineError(RuntimeError):
    pass


def log(msg: str) -> None:
    print(f"[policyengine] {msg}", file=sys.stderr)


def http_get(url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
    r = requests.get(url, headers=UA, params=params, timeout=60)
    r.raise_for_status()
    return r


def _result(payload: Dict[str, Any], what: str):
    if payload.get("status") == "error":
        raise PolicyEngineError(f"{what} failed: {payload.get('message') or 'unknown error'}")
    return payload.get("result") or {}


def fetch_metadata(country_id: str) -> Dict[str, Any]:
    log(f"Fetching metadata for {country_id}")
    metadata = dict(_result(http_get(f"{API_URL}/{country_id}/metadata").json(), "Metadata"))
    metadata["countryId"] = country_id
    metadata.setdefault("currency", COUNTRY_CURRENCY.get(country_id, "$"))
    return metadata


def fetch_policy(country_id: str, policy_id) -> Dict[str, Any]:
    log(f"Fetching policy #{policy_id}")
    result = _result(http_get(f"{API_URL}/{country_id}/policy/{policy_id}").json(), f"Policy #{policy_id}")
    return {
        "id": policy_id,
        "data": result.get("policy_json") or {},
        "label": result.get("label"),
    }


def fetch_economy(
    country_id: str,
    reform_id,
    baseline_id,
    region: str,
    time_period,
    version: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Economy-wide impact of reform over baseline. PolicyEngine computes these lazily and
    answers status="computing" until the simulation finishes, so poll until "ok".
    """
    poll = float(os.getenv("IMPACT_POLL_INTERVAL", "5"))
    timeout = float(os.getenv("IMPACT_TIMEOUT", "600"))
    url = f"{API_URL}/{country_id}/economy/{reform_id}/over/{baseline_id}"
    params = {"region": region, "time_period": time_period}
    if version:
        params["version"] = version

    deadline = time.monotonic() + timeout
    while True:
        payload = http_get(url, params=params).json()
        status = payload.get("status")
        if status == "ok":
            return payload.get("result") or {}
        if status != "computing":
            raise PolicyEngineError(f"Impact calculation failed: {payload.get('message') or status}")
        if time.monotonic() >= deadline:
            raise PolicyEngineError(f"Impact calculation still running after {timeout:.0f}s")
        log("Impact still computing; waiting…")
        time.sleep(poll)


def load_analysis_inputs(
    country_id: str,
    reform_id,
    baseline_id,
    region: str,
    time_period,
    version: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Everything the analysis prompt needs: impact, metadata, policy and the reform label."""
    metadata = metadata or fetch_metadata(country_id)
    reform = fetch_policy(country_id, reform_id)
    baseline = fetch_policy(country_id, baseline_id)
    impact = fetch_economy(country_id, reform_id, baseline_id, region, time_period, version or metadata.get("version"))
    return {
        "impact": impact,
        "metadata": metadata,
        "policy": {"baseline": baseline, "reform": reform},
        "policy_label": reform.get("label") or f"Policy #{reform_id}",
    }


def parse_args(argv):
    ap = argparse.ArgumentParser(description="Write a PolicyEngine reform analysis with an LLM.")
    ap.add_argument("--country", default="uk")
    ap.add_argument("--reform", required=True)
    ap.add_argument("--baseline", default=None, help="Defaults to the country's current law policy")
    ap.add_argument("--region", default=None, help="Defaults to the country code")
    ap.add_argument("--time-period", default="2023")
    ap.add_argument("--version", default=None)
    ap.add_argument("--audience", default="Normal", choices=["ELI5", "Normal", "Wonk"])
    ap.add_argument("--prompt-only", action="store_true", help="Print the prompt instead of calling the model")
    ap.add_argument("--out", default=None, help="Write the output to this file instead of stdout")
    return ap.parse_args(argv)


def main(argv=None):
    from analysis_core import build_prompt, generate_analysis

    args = parse_args(sys.argv[1:] if argv is None else argv)
    region = args.region or args.country
    metadata = fetch_metadata(args.country)
    baseline_id = args.baseline
    if baseline_id is None:
        baseline_id = metadata.get("current_law_id", 1)

    inputs = load_analysis_inputs(args.country, args.reform, baseline_id, region, args.time_period, args.version,
                                  metadata=metadata)
    prompt = build_prompt(
        inputs["impact"],
        inputs["policy_label"],
        inputs["metadata"],
        inputs["policy"],
        region,
        args.time_period,
        audience=args.audience,
        version=args.version,
    )

    if args.prompt_only:
        text = prompt
    else:
        log(f"Generating {args.audience} analysis…")
        text = generate_analysis(prompt)

    if args.out:
        pathlib.Path(args.out).write_text(text, encoding="utf-8")
        log(f"Saved -> {args.out}")
    else:
        print(text)


if __name__ == "__main__":
    main()
