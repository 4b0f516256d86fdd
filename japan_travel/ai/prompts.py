"""Prompt builders for plan generation and travel Q&A.

The model sees nothing but these strings, so their wording is the contract:
tests pin the exact clauses each destination / must-visit combination produces.
"""

from typing import List

from japan_travel.api.models.schemas import DESTINATION_AIRPORTS, Destination, TripRequest

ORIGIN = "Incheon International Airport (ICN), Seoul"

PLAN_TOOL_NAME = "return_travel_plan"

PLAN_SYSTEM_PROMPT = "You are a professional travel planner. Respond only with the requested travel plan data."

NO_MUST_VISIT_CLAUSE = "Must-visit places: none specified. Choose the most representative sights yourself."

OSAKA_KYOTO_LODGING_CLAUSE = (
    "Lodging: split the hotel recommendations between Osaka and Kyoto. "
    "Recommend Osaka hotels near Namba or Umeda and Kyoto hotels near Kyoto Station or Gion, "
    "and state in each hotel's notes which days of the itinerary it is the best base for."
)

GENERIC_LODGING_CLAUSE = (
    "Lodging: recommend hotels in areas with convenient access to public transit "
    "and to the places on the itinerary."
)

PLAN_OUTPUT_SCHEMA = """{
  "tripTitle": string,
  "dailyItinerary": [
    {
      "day": string,
      "date": "YYYY-MM-DD",
      "theme": string,
      "schedule": [{"time": "HH:MM", "activity": string, "description": string}]
    }
  ],
  "hotelRecommendations": [
    {"name": string, "area": string, "rating": number, "notes": string, "priceRange": string}
  ],
  "transportationGuide": string,
  "restaurantRecommendations": [
    {"name": string, "area": string, "rating": number, "notes": string}
  ]
}"""


def must_visit_clause(places: List[str]) -> str:
    names = [place.strip() for place in places if place.strip()]
    if not names:
        return NO_MUST_VISIT_CLAUSE
    lines = "\n".join(f"- {name}" for name in names)
    return f"Must-visit places (every one must appear in the itinerary):\n{lines}"


def lodging_clause(destination: Destination) -> str:
    if destination is Destination.OSAKA_KYOTO:
        return OSAKA_KYOTO_LODGING_CLAUSE
    if destination in (Destination.TOKYO, Destination.FUKUOKA):
        return GENERIC_LODGING_CLAUSE
    raise ValueError(f"Unsupported destination: {destination!r}")


def build_plan_prompt(request: TripRequest) -> str:
    destination = Destination(request.destination)
    airport = DESTINATION_AIRPORTS[destination]
    return "\n\n".join(
        [
            (
                f"You are a professional travel planner. The traveler departs from {ORIGIN} "
                f"and arrives at {airport} for a trip to {destination.value}, Japan, "
                f"from {request.startDate.isoformat()} to {request.endDate.isoformat()}."
            ),
            must_visit_clause(request.mustVisitPlaces),
            lodging_clause(destination),
            (
                "Requirements:\n"
                "- Plan one entry per day of the trip with a logical route for each day, "
                "and cover every must-visit place.\n"
                "- List schedule items in chronological order.\n"
                "- Recommend at least 5 hotels and at least 5 restaurants.\n"
                "- Include a numeric rating from 0 to 5 for every recommendation "
                "and sort each recommendation list by rating, highest first.\n"
                "- Write all descriptive text in Korean."
            ),
            (
                "Output a single JSON document matching this schema, with no text before or after it "
                f"and no markdown code fences:\n{PLAN_OUTPUT_SCHEMA}"
            ),
        ]
    )


def build_search_prompt(query: str) -> str:
    return f'Answer this question about traveling in Japan concisely, in Korean: "{query}"'
