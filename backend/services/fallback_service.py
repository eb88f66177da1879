from models.answers import Answers
from models.recommendation import City, Recommendation

FALLBACK_SCORE = 75

_CITY_REASONS = [
    "Main hub with services",
    "Popular expat/retirement spot",
    "Leisure and nature options",
]

_CITIES = {
    "Costa Rica": ["San José", "Guanacaste", "La Fortuna"],
    "Panama": ["Panama City", "Boquete", "David"],
    "Belize": ["Belize City", "San Pedro", "Caye Caulker"],
}


def pick_country(answers: Answers) -> str:
    if "panama" in answers.destinations:
        return "Panama"
    if "belize" in answers.destinations:
        return "Belize"
    if "work" in answers.relocation_type:
        return "Panama"
    return "Costa Rica"


def fallback_recommendation(answers: Answers) -> Recommendation:
    country = pick_country(answers)
    return Recommendation(
        country=country,
        score=FALLBACK_SCORE,
        reasons=[
            f"Based on your selections, {country} aligns best with your priorities.",
            "Good balance of lifestyle, services, and accessibility for your needs.",
        ],
        cities=[
            City(name=name, reason=reason)
            for name, reason in zip(_CITIES[country], _CITY_REASONS)
        ],
    )
