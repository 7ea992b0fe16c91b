"""Prompt template for the Building Configuration Agent."""

BUILDING_CONFIG_TEMPLATE = """Analyze this industrial property for tenant placement:

PROPERTY DATA:
Address: {address}
Type: {property_type}
Square Footage: {square_footage} sq ft
Acreage: {acreage} acres
Features: {features}

ANALYZE FOR:
1. Building configuration (e.g., "warehouse with X loading docks", "office with Y parking spaces")
2. Property features that match operational needs
3. Brief property info (zoning, proximity advantages)

Return JSON:
{{
  "configuration": "detailed building layout description with dock count, parking, etc.",
  "property_features": ["feature1", "feature2", "feature3"],
  "brief_property_info": "zoning and location advantages",
  "market_fit": "suitability for target tenant types",
  "technical_specs": {{
    "building_type": "{property_type}",
    "total_area": {total_area},
    "land_area": {land_area},
    "loading_docks": "estimated_count",
    "clear_height": "estimated_height",
    "parking_spaces": "estimated_count"
  }},
  "target_use_types": ["warehouse_space", "office_space", "mixed_use", "other"]
}}

Focus on practical operational details that emerging companies would need.
"""
