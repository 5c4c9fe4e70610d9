import copy
import json

import pytest

import analysis_core
from analysis_core import (
    baseline_parameter_values,
    build_prompt,
    escape_dollars,
    generate_analysis,
    generate_button_label,
    parameter_at_instant,
    prompt_lines,
    reform_provisions,
    region_label,
    relevant_parameters,
    results_url,
    split_analysis,
)
from prompts import AUDIENCE_DESCRIPTIONS
from sample_analysis import SAMPLE_ANALYSIS, SAMPLE_INPUTS

SINGLE_OLD = "gov.dwp.universal_credit.standard_allowance.amount.SINGLE_OLD"
SINGLE_YOUNG = "gov.dwp.universal_credit.standard_allowance.amount.SINGLE_YOUNG"


def _inputs():
    return copy.deepcopy(SAMPLE_INPUTS)


def _prompt(audience="Normal", version=None, **overrides):
    i = _inputs()
    i.update(overrides)
    return build_prompt(
        i["impact"], i["policy_label"], i["metadata"], i["policy"],
        i["region"], i["time_period"], audience=audience, version=version,
    )


class FakeMessage:
    def __init__(self, content):
        self.content = content


class FakeLLM:
    def __init__(self, reply="An analysis."):
        self.reply = reply
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        return FakeMessage(self.reply)


def test_parameter_at_instant_picks_latest_start_on_or_before():
    p = _inputs()["metadata"]["parameters"][SINGLE_OLD]
    assert parameter_at_instant(p, "2023-01-01") == 334.91
    assert parameter_at_instant(p, "2021-05-01") == 409.89
    assert parameter_at_instant(p, "2021-10-06") == 324.84


def test_parameter_at_instant_before_first_value_or_empty():
    p = _inputs()["metadata"]["parameters"][SINGLE_OLD]
    assert parameter_at_instant(p, "2020-01-01") is None
    assert parameter_at_instant({"parameter": "x", "values": {}}, "2023-01-01") is None
    assert parameter_at_instant({"parameter": "x"}, "2023-01-01") is None


def test_relevant_parameters_follow_reform_order_and_skip_unknown():
    i = _inputs()
    i["policy"]["reform"]["data"]["gov.unknown.param"] = {"2023-01-01.2100-12-31": 1}
    params = relevant_parameters(i["metadata"], i["policy"])
    assert [p["parameter"] for p in params] == [SINGLE_OLD, SINGLE_YOUNG]


def test_baseline_parameter_values_use_first_of_year():
    i = _inputs()
    params = relevant_parameters(i["metadata"], i["policy"])
    assert baseline_parameter_values(params, "2023") == [{SINGLE_OLD: 334.91}, {SINGLE_YOUNG: 265.31}]


def test_region_label_falls_back_to_key():
    metadata = _inputs()["metadata"]
    assert region_label(metadata, "country/scotland") == "Scotland"
    assert region_label(metadata, "constituency/x") == "constituency/x"


def test_results_url():
    i = _inputs()
    url = results_url(i["metadata"], "0.44.2", "uk", "2023", i["policy"])
    assert url == (
        f"{analysis_core.APP_URL}/uk/policy?version=0.44.2&region=uk&timePeriod=2023"
        "&reform=6668&baseline=1&embed=True"
    )


def test_prompt_uk_conventions():
    prompt = _prompt()
    assert "policy reforms for 2023 and the UK" in prompt
    assert "£3.1 billion, £300 million, £106,000, £1.50 (never £1.5)" in prompt
    assert "Use British English spelling and grammar." in prompt
    assert "Cite PolicyEngine UK v0.44.2 and the PolicyEngine-enhanced 2019 Family Resources Survey microdata" in prompt
    assert "the poverty measure reported is absolute poverty before housing costs." in prompt
    assert prompt.startswith("I'm using PolicyEngine")


def test_prompt_us_conventions():
    i = _inputs()
    i["metadata"]["countryId"] = "us"
    i["metadata"]["currency"] = "$"
    prompt = _prompt(metadata=i["metadata"])
    assert "Use American English spelling and grammar." in prompt
    assert "Cite PolicyEngine US v0.44.2 and the 2021 Current Population Survey March Supplement microdata" in prompt
    assert "the Supplemental Poverty Measure" in prompt
    assert "$3.1 billion" in prompt


def test_prompt_embeds_three_charts_with_shared_base_url():
    prompt = _prompt()
    base = f"{analysis_core.APP_URL}/uk/policy?version=0.44.2&region=uk&timePeriod=2023&reform=6668&baseline=1&embed=True"
    for focus in ("policyOutput.netIncome", "policyOutput.decileRelativeImpact", "policyOutput.povertyImpact"):
        iframe = (
            f'<iframe src="{base}&focus={focus}" width="100%" height="400" '
            'style="border: none; overflow: hidden;" onload="scroll(0,0);"></iframe>'
        )
        assert iframe in prompt
    assert prompt.count("<iframe") == 3


def test_prompt_version_override():
    prompt = _prompt(version="1.2.3")
    assert "PolicyEngine UK v1.2.3" in prompt
    assert "version=1.2.3&" in prompt
    assert "0.44.2" not in prompt


def test_prompt_serialises_json_compactly():
    i = _inputs()
    prompt = _prompt()
    baseline = json.dumps([{SINGLE_OLD: 334.91}, {SINGLE_YOUNG: 265.31}], separators=(",", ":"))
    assert f"describes the default parameter values: {baseline}" in prompt
    assert json.dumps(i["impact"]["inequality"], separators=(",", ":")) in prompt
    assert json.dumps(i["impact"]["poverty"]["deep_poverty"], separators=(",", ":")) in prompt
    assert "Restore the £20/week UC uplift has the following impacts" in prompt


@pytest.mark.parametrize("audience", ["ELI5", "Normal", "Wonk"])
def test_prompt_ends_with_audience(audience):
    prompt = _prompt(audience=audience)
    assert prompt.endswith(AUDIENCE_DESCRIPTIONS[audience])
    others = [a for a in AUDIENCE_DESCRIPTIONS if a != audience]
    assert not any(AUDIENCE_DESCRIPTIONS[o] in prompt for o in others)


def test_prompt_rejects_unknown_audience():
    with pytest.raises(ValueError):
        _prompt(audience="Expert")


def test_prompt_lines_round_trip():
    prompt = _prompt()
    lines = prompt_lines(prompt)
    assert len(lines) > 10
    assert "\n".join(lines) == prompt


def test_generate_analysis_sends_single_user_message():
    llm = FakeLLM("The reform costs £3.1 billion.")
    out = generate_analysis("hello", llm=llm)
    assert out == "The reform costs £3.1 billion."
    assert llm.calls == [[{"role": "user", "content": "hello"}]]


def test_generate_analysis_propagates_errors():
    class Broken:
        def invoke(self, messages):
            raise RuntimeError("rate limited")

    with pytest.raises(RuntimeError, match="rate limited"):
        generate_analysis("hello", llm=Broken())


def test_split_analysis_sample():
    segments = split_analysis(SAMPLE_ANALYSIS)
    kinds = [k for k, _ in segments]
    assert kinds.count("iframe") == 2
    assert kinds[0] == "markdown"
    assert kinds[-1] == "markdown"
    frames = [part for k, part in segments if k == "iframe"]
    assert frames[0]["src"].endswith("&focus=policyOutput.netIncome")
    assert frames[1]["src"].endswith("&focus=policyOutput.decileRelativeImpact")
    assert all(f["height"] == 400 for f in frames)
    assert not any("<iframe" in part for k, part in segments if k == "markdown")


def test_split_analysis_plain_and_empty():
    assert split_analysis("Just *markdown*.") == [("markdown", "Just *markdown*.")]
    assert split_analysis("") == []


def test_split_analysis_adjacent_iframes_and_custom_height():
    text = '<iframe src="a" height="300"></iframe><iframe src="b"></iframe>'
    assert split_analysis(text) == [
        ("iframe", {"src": "a", "height": 300}),
        ("iframe", {"src": "b", "height": 400}),
    ]


def test_generate_button_label():
    assert generate_button_label(False, False) == "Generate an analysis"
    assert generate_button_label(True, True) == "Generating"
    assert generate_button_label(True, False) == "Regenerate analysis"


def test_reform_provisions():
    i = _inputs()
    rows = reform_provisions(i["metadata"], i["policy"], "2023")
    assert rows[0]["parameter"] == SINGLE_OLD
    assert rows[0]["baseline"] == 334.91
    assert rows[0]["reform"] == 421
    assert rows[1]["reform"] == 352
    # reform starts in 2023; nothing in force for 2022
    assert reform_provisions(i["metadata"], i["policy"], "2022")[0]["reform"] is None


def test_sample_analysis_keeps_summary():
    assert SAMPLE_ANALYSIS.startswith("This analysis examines the economic impact")
    assert SAMPLE_ANALYSIS.endswith("It also leads to a small decrease in income inequality.")
    assert "relative changes indicate a decrease of 0.1 percentage points for both females" in SAMPLE_ANALYSIS
    assert "localhost" not in SAMPLE_ANALYSIS


def test_json_matches_javascript_numbers():
    budget = SAMPLE_INPUTS["impact"]["budget"]
    assert analysis_core._to_json(budget) == (
        '{"budgetary_impact":-3100000000,"tax_revenue_impact":0,"benefit_spending_impact":3100000000,'
        '"households":28500000,"baseline_net_income":1350000000000}'
    )


def test_json_non_finite_becomes_null():
    out = analysis_core._to_json({"a": float("nan"), "b": [float("inf"), 1.5, 2.0], "c": True, "d": "£"})
    assert out == '{"a":null,"b":[null,1.5,2],"c":true,"d":"£"}'


def test_prompt_budget_numbers_are_integral():
    prompt = _prompt()
    assert '"budgetary_impact":-3100000000,' in prompt
    assert "3100000000.0" not in prompt


def test_prompt_whitespace_matches_template_literal():
    prompt = _prompt()
    assert "You should:\n  \n  * First explain" in prompt
    # policy JSON line ends with a single newline before the impact block
    assert '}\nRestore the £20/week UC uplift has the following impacts from the PolicyEngine microsimulation model: \n\n' in prompt
    assert prompt.endswith("\n  \n  " + AUDIENCE_DESCRIPTIONS["Normal"])


def test_escape_dollars():
    assert escape_dollars("Costs $3.1 billion and saves $300 million.") == (
        "Costs \\$3.1 billion and saves \\$300 million."
    )
    assert escape_dollars("Already \\$5 escaped") == "Already \\$5 escaped"
    assert escape_dollars("£3.1 billion") == "£3.1 billion"
