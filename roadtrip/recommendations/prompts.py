"""
Prompts for stop and attraction recommendations.
"""
from typing import Optional

from roadtrip.models import Coordinate, CategoryPreferences

METERS_PER_MILE = 1609.34

DESTINATION_POI_PROMPT = """\
I need recommendations for exactly 2-3 must-visit attractions in {place_name} (coordinates: [{lat}, {lng}]).

These should be the most popular, highly-rated, and culturally significant attractions that tourists would typically want to visit.

For each recommendation, provide the following information in valid JSON format:
- name: Full and accurate name of the place
- category: Specific type of attraction (e.g., Museum, Historic Site, Park, Landmark, etc.)
- description: A 1-2 sentence description highlighting what makes it special and why visitors should go there
- coordinate: Precise [longitude, latitude] coordinates as numbers (not strings)
- address: Physical street address if available

IMPORTANT:
1. Format your response ONLY as a clean JSON array with each object containing these fields.
2. Provide geographically accurate coordinates - don't guess if you're unsure.
3. Make sure the places are actual attractions in the exact city/location specified.
4. DO NOT include any explanatory text outside the JSON array.

Example format:
[
  {{
    "name": "Golden Gate Bridge",
    "category": "Landmark",
    "description": "Iconic suspension bridge spanning the Golden Gate Strait, with spectacular views of the bay and city skyline.",
    "coordinate": [-122.4786, 37.8199],
    "address": "Golden Gate Bridge, San Francisco, CA 94129"
  }}
]"""

ROUTE_PLACES_PROMPT = """\
I'm planning a road trip from {origin_name} to {destination_name}. The total distance is {miles:.1f} miles and would take approximately {hours:.1f} hours of continuous driving.

Based on this information, recommend 2-4 diverse and interesting stopping places along this route. Focus on unique attractions, natural wonders, landmarks, and hidden gems rather than just cities. Consider:
1. A reasonable daily driving time (around 5-8 hours per day)
2. Places that are directly on or very close to the route (not requiring long detours)
3. Places that showcase the unique character and natural features of the regions you're driving through{category_focus}

List the places in the order a traveler would reach them driving from {origin_name}.

For each place, provide:
1. Specific name of the attraction or landmark (not just a city name)
2. Brief, evocative description of what makes it special and worth visiting
3. Why it's a good stopping point on this journey
4. Coordinates as precisely as possible [longitude, latitude]
5. Category tag that matches one of the selected preferences (e.g., "National Park", "Food Stop", "Landmark", etc.)

Respond ONLY with a valid JSON object in the following format:
{{
  "recommendedPlaces": [
    {{
      "name": "Specific Attraction/Landmark Name",
      "description": "Brief, engaging description highlighting what makes this place special",
      "reasonToStop": "Why this is a perfect stop on this journey",
      "coordinate": [longitude, latitude],
      "category": "The category this place belongs to"
    }}
  ]
}}

Do not include any text outside of this JSON object."""

CATEGORY_FOCUS = """

The traveler has SPECIFICALLY requested to see ONLY the following types of attractions: {categories}.

CRITICALLY IMPORTANT: ONLY recommend places that match the traveler's selected categories listed above. Do not recommend any places outside of these categories, even if they seem interesting."""


def build_destination_poi_prompt(place_name: str, coordinate: Coordinate) -> str:
    return DESTINATION_POI_PROMPT.format(
        place_name=place_name,
        lat=coordinate.lat,
        lng=coordinate.lng,
    )


def build_route_places_prompt(
    origin_name: str,
    destination_name: str,
    distance: float,
    duration: float,
    preferences: Optional[CategoryPreferences] = None,
) -> str:
    """Prompt for stops along a route; distance in meters, duration in seconds."""
    category_focus = ""
    if preferences:
        selected = preferences.selected_categories()
        if selected:
            category_focus = CATEGORY_FOCUS.format(categories="; ".join(selected))

    return ROUTE_PLACES_PROMPT.format(
        origin_name=origin_name,
        destination_name=destination_name,
        miles=distance / METERS_PER_MILE,
        hours=duration / 3600,
        category_focus=category_focus,
    )
