# sample_analysis.py
# Placeholder shown before the first generation: restoring the £20/week UC uplift (UK, 2023).
SAMPLE_ANALYSIS = (
  "This analysis examines the economic impact of a hypothetical tax-benefit policy reform for the UK in 2023. "
  "The reform involves restoring the £20/week Universal Credit (UC) uplift for various groups. "
  "Using PolicyEngine UK v0.44.2 and the PolicyEngine-enhanced 2019 Family Resources Survey microdata, we can assess the impacts "
  "of this reform on budgetary costs, income distribution, poverty, and inequality. "
  "The reform increases the standard allowance for couples where one is over 25 from £525.72 to £612 per month, and for couples "
  "where both are under 25 from £416.45 to £503 per month. "
  "Similarly, it increases the standard allowance for single claimants over 25 from £334.91 to £421 per month and for single "
  "claimants under 25 from £265.31 to £352 per month. "
  "The total budgetary impact of this reform is an increase in benefit spending of £3.1 billion, with no change in tax revenues. "
  "The budgetary impact can be visualised through the following chart: "
  '<iframe src="https://policyengine.org/uk/policy?version=0.44.2&region=uk&timePeriod=2023&reform=6668&baseline=1&embed=True&focus=policyOutput.netIncome" width="100%" height="400" style="border: none; overflow: hidden;" onload="scroll(0,0);"></iframe> '
  "The policy affects households differently depending on their income decile. "
  "For instance, 18.4% of the lowest-income decile experiences gains of more than 5%, while only 0.6% of the highest-income "
  "decile has similar gains. "
  "The following chart illustrates these changes by income decile: "
  '<iframe src="https://policyengine.org/uk/policy?version=0.44.2&region=uk&timePeriod=2023&reform=6668&baseline=1&embed=True&focus=policyOutput.decileRelativeImpact" width="100%" height="400" style="border: none; overflow: hidden;" onload="scroll(0,0);"></iframe> '
  "In terms of the poverty impacts of this reform, we report the absolute poverty rates before housing costs. "
  "The policy leads to a 0.7 percentage point reduction in poverty rates for all individuals (from 16.5% to 15.8%). "
  "Similarly, poverty rates for children decrease by 0.9 percentage points (from 24.1% to 23.2%), while poverty rates for adults "
  "decrease by 0.8 percentage points (from 14.7% to 13.9%). "
  "The poverty rates for seniors decrease by a smaller margin of 0.1 percentage points (from 13.8% to 13.7%). "
  "The reform also leads to a decrease in deep poverty rates. "
  "Deep poverty rates for children decrease by 0.2 percentage points (from 2.6% to 2.4%), while adult deep poverty rates decrease "
  "by 0.2 percentage points (from 2.3% to 2.1%). "
  "No change is observed in the deep poverty rates for seniors. "
  "The relative changes in deep poverty rates by gender are a decrease of 0.1 percentage points for females (from 1.8% to 1.7%) "
  "and for males (from 2.1% to 2.0%). "
  "In terms of poverty rates, relative changes indicate a decrease of 0.1 percentage points for both females (from 17.0% to 16.3%) "
  "and males (from 15.9% to 15.3%). "
  "Lastly, the reform has a relatively small impact on income inequality. "
  "The Gini coefficient of income inequality decreases slightly from 32.3% to 32.1%. "
  "The top 10% of households' share of income slightly declines from 25.1% to 25.0%, while the top 1% of households' share "
  "slightly falls from 6.2% to 6.1%. "
  "To summarise, the reform analysed herein results in an increase in benefit spending of £3.1 billion and has positive effects "
  "on poverty reduction, particularly for lower-income households, children, and adults. "
  "It also leads to a small decrease in income inequality."
)

# Offline inputs for the same reform, trimmed to what the prompt reads.
SAMPLE_INPUTS = {
  "policy_label": "Restore the £20/week UC uplift",
  "region": "uk",
  "time_period": "2023",
  "metadata": {
    "countryId": "uk",
    "currency": "£",
    "version": "0.44.2",
    "economy_options": {
      "region": [
        {"name": "uk", "label": "the UK"},
        {"name": "country/england", "label": "England"},
        {"name": "country/scotland", "label": "Scotland"},
        {"name": "country/wales", "label": "Wales"},
        {"name": "country/ni", "label": "Northern Ireland"},
      ],
    },
    "parameters": {
      "gov.dwp.universal_credit.standard_allowance.amount.SINGLE_OLD": {
        "parameter": "gov.dwp.universal_credit.standard_allowance.amount.SINGLE_OLD",
        "label": "Universal Credit single claimant over 25 standard allowance",
        "unit": "currency-GBP",
        "period": "month",
        "values": {"2021-04-01": 409.89, "2021-10-06": 324.84, "2022-04-01": 334.91},
      },
      "gov.dwp.universal_credit.standard_allowance.amount.SINGLE_YOUNG": {
        "parameter": "gov.dwp.universal_credit.standard_allowance.amount.SINGLE_YOUNG",
        "label": "Universal Credit single claimant under 25 standard allowance",
        "unit": "currency-GBP",
        "period": "month",
        "values": {"2021-04-01": 344.00, "2021-10-06": 257.33, "2022-04-01": 265.31},
      },
    },
  },
  "policy": {
    "baseline": {"id": 1, "label": "Current law", "data": {}},
    "reform": {
      "id": 6668,
      "label": "Restore the £20/week UC uplift",
      "data": {
        "gov.dwp.universal_credit.standard_allowance.amount.SINGLE_OLD": {"2023-01-01.2100-12-31": 421},
        "gov.dwp.universal_credit.standard_allowance.amount.SINGLE_YOUNG": {"2023-01-01.2100-12-31": 352},
      },
    },
  },
  "impact": {
    "budget": {
      "budgetary_impact": -3.1e9,
      "tax_revenue_impact": 0.0,
      "benefit_spending_impact": 3.1e9,
      "households": 28.5e6,
      "baseline_net_income": 1.35e12,
    },
    "intra_decile": {
      "all": {"Gain more than 5%": 0.052, "No change": 0.91},
      "deciles": {"Gain more than 5%": [0.184, 0.121, 0.066, 0.031, 0.02, 0.014, 0.01, 0.008, 0.007, 0.006]},
    },
    "decile": {
      "average": {"1": 402.1, "2": 311.7, "3": 190.2, "10": 21.4},
      "relative": {"1": 0.031, "2": 0.019, "3": 0.009, "10": 0.0002},
    },
    "poverty": {
      "poverty": {
        "all": {"baseline": 0.165, "reform": 0.158},
        "child": {"baseline": 0.241, "reform": 0.232},
        "adult": {"baseline": 0.147, "reform": 0.139},
        "senior": {"baseline": 0.138, "reform": 0.137},
      },
      "deep_poverty": {
        "child": {"baseline": 0.026, "reform": 0.024},
        "adult": {"baseline": 0.023, "reform": 0.021},
        "senior": {"baseline": 0.01, "reform": 0.01},
      },
    },
    "poverty_by_gender": {
      "poverty": {"female": {"baseline": 0.17, "reform": 0.163}, "male": {"baseline": 0.159, "reform": 0.153}},
      "deep_poverty": {"female": {"baseline": 0.018, "reform": 0.017}, "male": {"baseline": 0.021, "reform": 0.02}},
    },
    "inequality": {
      "gini": {"baseline": 0.323, "reform": 0.321},
      "top_10_pct_share": {"baseline": 0.251, "reform": 0.25},
      "top_1_pct_share": {"baseline": 0.062, "reform": 0.061},
    },
  },
}
