"""Prompt templates for the Tenant Discovery Agent.

The discovery prompt is rendered from the active ``PromptConfig`` snapshot,
so every tunable (exclusions, radius, industries, tone) flows into it.
"""

TENANT_DISCOVERY_TEMPLATE = """Discover {discover_count} {strategy_label} companies (AVOID: {excluded}) that could lease this property:

PROPERTY DETAILS:
- Address: {address}
- Type: {property_type}
- Size: {square_footage} sq ft
- Configuration: {configuration}
- Features: {features}

AREA GROWTH TRENDS:
- Economic Trends: {area_growth_trends}
- Industry Growth: {national_industry_trend}

SEARCH CRITERIA:
- Find companies with operations within {search_radius_miles} miles of the property
- Focus on EMERGING, GROWING, SCALING, EXPANDING or MID-SIZED companies
- Strategy: {strategy_text}
- Preferred company size: {preferred_company_size}
- Exclude large corporations (e.g., {excluded})
- Target industries: {focus_industries}
- Companies with operational needs matching the building configuration
- Companies benefiting from area economic growth trends

TARGET TYPES:
{target_type_lines}

For each company, return:
{{
  "tenants": [
    {{
      "company": "Company Name",
      "nearby_location": "specific nearby site/facility (within {location_radius} miles)",
      "distance": "miles from property",
      "operations": "core business description",
      "benefit_type": "warehouse_space|office_space|mixed_use|other",
      "industry_type": "{industry_choices}|Other"
    }}
  ]
}}

Focus on: {target_types}.
Provide at least {result_count} potential tenants with {tone} analysis.
If you cannot find enough, try to widen the search criteria slightly, or include more significant companies.
Ensure the output is in JSON format. Do not include any other text or explanations outside the JSON structure.
"""

BENEFIT_PARAGRAPH_TEMPLATE = (
    "The property at {address} benefits {company} by offering {square_footage} sq ft "
    "of {space_label} with {features}, addressing operational needs near {nearby_location}. "
    "With {area_growth} and {national_trend}, it provides operational advantages and "
    "strategic positioning, making it a top fit among 50 properties."
)
