"""
Seasonal and cultural purchasing patterns for the Norwegian calendar.
"""

# Date-derived profiles. Selection rules live in
# receipt_engine.seasonal.seasonal_context; this is the data they return.
SEASONAL_PROFILES = {
    "national_day": {
        "season_label": "national_day",
        "cultural_event": "17. mai (Constitution Day)",
        "typical_purchases": ["is", "pølser", "brus", "flagg", "kaker"],
        "price_expectation": "High demand for ice cream, hot dogs and decorations; expect queues and few discounts",
    },
    "christmas": {
        "season_label": "christmas",
        "cultural_event": "Jul (Christmas)",
        "typical_purchases": ["ribbe", "pinnekjøtt", "julebrus", "gaver", "marsipan"],
        "price_expectation": "Peak prices on festive food and gifts; campaign prices on julebrus and juleøl",
    },
    "easter": {
        "season_label": "easter",
        "cultural_event": "Påske (Easter)",
        "typical_purchases": ["kvikklunsj", "appelsiner", "påskeegg", "lam", "hyttemat"],
        "price_expectation": "Cabin provisions in demand; shops close over the Easter holidays",
    },
    "summer": {
        "season_label": "summer",
        "cultural_event": None,
        "typical_purchases": ["grillmat", "is", "jordbær", "brus", "solkrem"],
        "price_expectation": "Seasonal discounts on barbecue goods; strawberries priced by harvest",
    },
    "back_to_school": {
        "season_label": "back_to_school",
        "cultural_event": "Skolestart",
        "typical_purchases": ["skolesekk", "matbokser", "skrivesaker", "klær"],
        "price_expectation": "Campaigns on school supplies; higher spend on clothing",
    },
    "standard": {
        "season_label": "standard",
        "cultural_event": None,
        "typical_purchases": ["dagligvarer", "husholdningsartikler"],
        "price_expectation": "Normal price level",
    },
}

# Informational catalog used by the predictive analyzer.
# expected_increase is a spend multiplier relative to a standard month.
SEASONAL_EVENTS = [
    {
        "event": "17. mai",
        "months": [5],
        "expected_increase": 1.4,
        "categories": ["groceries", "decorations", "catering"],
        "recommendation": "Reserve funds for the 17. mai celebration in April",
    },
    {
        "event": "Påske",
        "months": [3, 4],
        "expected_increase": 1.3,
        "categories": ["groceries", "travel"],
        "recommendation": "Buy cabin provisions before the holiday closing days",
    },
    {
        "event": "Sommer",
        "months": [6, 7, 8],
        "expected_increase": 1.2,
        "categories": ["groceries", "equipment", "travel"],
        "recommendation": "Plan summer activities early to use seasonal discounts",
    },
    {
        "event": "Skolestart",
        "months": [9],
        "expected_increase": 1.25,
        "categories": ["equipment", "clothing"],
        "recommendation": "Budget for new equipment and membership fees in August",
    },
    {
        "event": "Jul",
        "months": [12],
        "expected_increase": 1.8,
        "categories": ["groceries", "gifts", "alcohol"],
        "recommendation": "Set aside a Christmas budget from October onwards",
    },
]
