"""
Merchant reference patterns for Norwegian receipt classification.
Known chains, their tax category and the products they sell by season.
"""

# Merchant Catalog
# Key = short uppercase fingerprint searched for in receipt text.
# typical_vat_rate is the MVA bracket the chain normally prints on receipts.
MERCHANT_PATTERNS = {
    "REMA": {
        "name": "REMA 1000",
        "chain": "Reitangruppen",
        "category": "grocery",
        "typical_vat_rate": 15,
        "seasonal_products": ["grillmat", "is", "påskeegg", "julebrus", "ribbe"],
        "organization_id_pattern": "NO 976 584 171 MVA",
        "base_confidence": 0.95,
    },
    "KIWI": {
        "name": "KIWI",
        "chain": "NorgesGruppen",
        "category": "grocery",
        "typical_vat_rate": 15,
        "seasonal_products": ["jordbær", "pølser", "kvikklunsj", "pinnekjøtt"],
        "organization_id_pattern": "NO 985 089 507 MVA",
        "base_confidence": 0.95,
    },
    "MENY": {
        "name": "MENY",
        "chain": "NorgesGruppen",
        "category": "grocery",
        "typical_vat_rate": 15,
        "seasonal_products": ["skalldyr", "ribbe", "lammestek", "ferske bær"],
        "organization_id_pattern": None,
        "base_confidence": 0.92,
    },
    "SPAR": {
        "name": "SPAR",
        "chain": "NorgesGruppen",
        "category": "grocery",
        "typical_vat_rate": 15,
        "seasonal_products": ["grillmat", "julemat", "påskemat"],
        "organization_id_pattern": None,
        "base_confidence": 0.85,
    },
    "JOKER": {
        "name": "Joker",
        "chain": "NorgesGruppen",
        "category": "grocery",
        "typical_vat_rate": 15,
        "seasonal_products": ["is", "aviser", "julebrus"],
        "organization_id_pattern": None,
        "base_confidence": 0.88,
    },
    "COOP": {
        "name": "Coop",
        "chain": "Coop Norge",
        "category": "grocery",
        "typical_vat_rate": 15,
        "seasonal_products": ["grillmat", "påskeegg", "julemat"],
        "organization_id_pattern": "NO 951 312 858 MVA",
        "base_confidence": 0.90,
    },
    "EXTRA": {
        "name": "Coop Extra",
        "chain": "Coop Norge",
        "category": "grocery",
        "typical_vat_rate": 15,
        "seasonal_products": ["storpakninger", "grillmat", "julebrus"],
        "organization_id_pattern": None,
        "base_confidence": 0.90,
    },
    "BUNNPRIS": {
        "name": "Bunnpris",
        "chain": "Bunnpris",
        "category": "grocery",
        "typical_vat_rate": 15,
        "seasonal_products": ["grillmat", "is", "julemat"],
        "organization_id_pattern": None,
        "base_confidence": 0.90,
    },
    "VINMONOPOLET": {
        "name": "Vinmonopolet",
        "chain": "AS Vinmonopolet",
        "category": "alcohol",
        "typical_vat_rate": 25,
        "seasonal_products": ["akevitt", "juleøl", "musserende vin"],
        "organization_id_pattern": "NO 914 781 396 MVA",
        "base_confidence": 0.98,
        "is_regulated_alcohol": True,
    },
    "NARVESEN": {
        "name": "Narvesen",
        "chain": "Reitan Convenience",
        "category": "convenience",
        "typical_vat_rate": 25,
        "seasonal_products": ["is", "aviser", "pølser"],
        "organization_id_pattern": None,
        "base_confidence": 0.88,
    },
    "CLASOHLSON": {
        "name": "Clas Ohlson",
        "chain": "Clas Ohlson",
        "category": "hardware",
        "typical_vat_rate": 25,
        "seasonal_products": ["julebelysning", "grill", "hagemøbler"],
        "organization_id_pattern": None,
        "base_confidence": 0.90,
    },
    "ELKJOP": {
        "name": "Elkjøp",
        "chain": "Elkjøp Nordic",
        "category": "electronics",
        "typical_vat_rate": 25,
        "seasonal_products": ["skole-PC", "TV", "gaver"],
        "organization_id_pattern": None,
        "base_confidence": 0.90,
    },
    "XXL": {
        "name": "XXL Sport",
        "chain": "XXL",
        "category": "sports",
        "typical_vat_rate": 25,
        "seasonal_products": ["ski", "sykkel", "telt"],
        "organization_id_pattern": None,
        "base_confidence": 0.85,
    },
}

# Multi-word spellings that never contain a catalog key verbatim.
# Checked only when no catalog key matched. Maps phrase -> catalog key.
MERCHANT_ALIASES = {
    "CLAS OHLSON": "CLASOHLSON",
    "ELKJØP": "ELKJOP",
    "CLAS OHLSSON": "CLASOHLSON",
    "VIN MONOPOLET": "VINMONOPOLET",
    "POLET": "VINMONOPOLET",
}

# Fallback profile when nothing in the catalog matches
UNKNOWN_MERCHANT_PATTERN = {
    "name": "Unknown merchant",
    "chain": "",
    "category": "unidentified",
    "typical_vat_rate": 25,
    "seasonal_products": [],
    "organization_id_pattern": None,
    "base_confidence": 0.5,
}

# Food words that put a purchase on the reduced (15%) MVA bracket.
# Matched as whole words against upper-cased receipt text.
FOOD_KEYWORDS = [
    "MELK", "BRØD", "OST", "SMØR", "EGG", "KJØTT", "KYLLING", "FISK",
    "LAKS", "FRUKT", "GRØNNSAK", "GRØNNSAKER", "POTET", "POTETER", "EPLE",
    "EPLER", "BANAN", "BANANER", "KAFFE", "TE", "JUICE", "YOGHURT",
    "PÅLEGG", "PØLSE", "PØLSER", "RIBBE", "MEL", "RIS", "PASTA", "GRØT",
    "BÆR", "MATVARER", "DAGLIGVARER",
]

# Organisation type spellings, grouped into the two rule families the
# compliance table knows about. Everything else is routed to an accountant.
ORGANIZATION_TYPE_PATTERNS = {
    "association": ["association", "club", "forening", "lag", "idrettslag", "klubb"],
    "band": ["band", "corps", "korps", "musikkorps", "skolekorps", "band/corps"],
}
