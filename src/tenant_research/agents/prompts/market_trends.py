"""Prompt template for the Market Trend Agent."""

MARKET_TRENDS_TEMPLATE = """Analyze area growth trends and economic patterns for: {address}

Focus on emerging business opportunities and economic indicators that would attract growing companies:

Return JSON:
{{
  "area_growth_trends": "economic patterns benefiting new businesses (job growth, infrastructure, etc.)",
  "national_industry_trend": "broader industry trends affecting this area",
  "booming_industry": "high-demand sectors in this region",
  "recent_real_estate_news": "relevant local real estate developments",
  "local_trends": "2-3 sentence summary of local economic conditions",
  "industry_growth": "industrial market growth summary",
  "area_growth_score": numerical_score_1_to_10,
  "demand_indicators": ["economic_factor1", "economic_factor2", "economic_factor3"],
  "competitive_factors": ["location_advantage1", "location_advantage2"]
}}

Focus on factors that would attract emerging, growing companies rather than large corporations.
"""
