AUDIENCE_DESCRIPTIONS = {
    "ELI5": "Write this for a five-year-old who doesn't know anything about economics or policy. Explain fundamental concepts like taxes, poverty rates, and inequality as needed.",
    "Normal": "Write this for a policy analyst who knows a bit about economics and policy.",
    "Wonk": "Write this for a policy analyst who knows a lot about economics and policy. Use acronyms and jargon if it makes the content more concise and informative.",
}

DEFAULT_AUDIENCE = "Normal"

# ---- Chart embeds (PolicyEngine embed=True pages) ----
CHART_IFRAME = '<iframe src="{src}" width="100%" height="400" style="border: none; overflow: hidden;" onload="scroll(0,0);"></iframe>'

BUDGET_FOCUS = "policyOutput.netIncome"
DECILE_FOCUS = "policyOutput.decileRelativeImpact"
POVERTY_FOCUS = "policyOutput.povertyImpact"

# ---- Country conventions ----
SPELLING = {"uk": "British"}
MICRODATA = {"uk": "PolicyEngine-enhanced 2019 Family Resources Survey"}
POVERTY_MEASURE = {"uk": "absolute poverty before housing costs"}

DEFAULT_SPELLING = "American"
DEFAULT_MICRODATA = "2021 Current Population Survey March Supplement"
DEFAULT_POVERTY_MEASURE = "the Supplemental Poverty Measure"

POLICY_DETAILS_PROMPT = """I'm using PolicyEngine, a free, open source tool to compute the impact of public policy. I'm writing up an economic analysis of a hypothetical tax-benefit policy reform. Please write the analysis for me using the details below, in their order. You should:
  
  * First explain each provision of the reform, noting that it represents policy reforms for {time_period} and {region_label}. Explain how the parameters are changing from the baseline to the reform values using the given data.
  * Round large numbers like: {currency}3.1 billion, {currency}300 million, {currency}106,000, {currency}1.50 (never {currency}1.5).
  * Round percentages to one decimal place.
  * Avoid normative language like 'requires', 'should', 'must', and use quantitative statements over general adjectives and adverbs. If you don't know what something is, don't make it up.
  * Avoid speculating about the intent of the policy or inferring any motives; only describe the observable effects and impacts of the policy. Refrain from using subjective language or making assumptions about the recipients and their needs.
  * Use the active voice where possible; for example, write phrases where the reform is the subject, such as "the reform [or a description of the reform] reduces poverty by x%".
  * Use {spelling} English spelling and grammar.
  * Cite PolicyEngine {country_upper} v{version} and the {microdata} microdata when describing policy impacts.
  * When describing poverty impacts, note that the poverty measure reported is {poverty_measure}.
  * Don't use headers, but do use Markdown formatting (e.g. * for bullets).
  * Include the following embeds inline, without a header so it flows.
  * Immediately after you describe the budgetary impact, include an IFrame pointing to the chart. It should look like this: {budget_iframe}
  * Immediately after you describe the changes by income decile, include an IFrame: {decile_iframe}
  * Immediately after you describe the changes by poverty status, include an IFrame: {poverty_iframe}

  This JSON snippet describes the default parameter values: {baseline_values}

  This JSON snippet describes the baseline and reform policies being compared: {policy}
"""

IMPACT_DESCRIPTION_PROMPT = """{policy_label} has the following impacts from the PolicyEngine microsimulation model: 

  This JSON snippet describes the relevant parameters with more details: {parameters}

  This JSON describes the total budgetary impact, the change to tax revenues and benefit spending (ignore 'households' and 'baseline_net_income'): {budget}

  This JSON describes how common different outcomes were at each income decile: {intra_decile}

  This JSON describes the average and relative changes to income by each income decile: {decile}

  This JSON describes the baseline and reform poverty rates by age group (describe the relative changes): {poverty}

  This JSON describes the baseline and reform deep poverty rates by age group (describe the relative changes): {deep_poverty}

  This JSON describes the baseline and reform poverty and deep poverty rates by gender (briefly describe the relative changes): {poverty_by_gender}

  This JSON describes three inequality metrics in the baseline and reform, the Gini coefficient of income inequality, the share of income held by the top 10% of households and the share held by the top 1% (describe the relative changes): {inequality}
  
  """
