"""
Engine configuration for receipt classification and spend prediction.
Contains thresholds, multipliers, and rule parameters.
"""

# Merchant detection
DETECTION_CONFIG = {
    "default_adjustment": 0.5,  # Learned adjustment for merchants with no feedback
    "min_confidence": 0.1,
    "max_confidence": 0.99,
    "name_match_score_cutoff": 90,  # rapidfuzz WRatio cutoff (0-100) for correction names
}

# Amount extraction
AMOUNT_CONFIG = {
    "default_amount": 100.0,  # Used when no amount can be read from the text
}

# MVA (VAT) brackets in percent
VAT_CONFIG = {
    "brackets": {
        "zero": 0,
        "low": 12,  # Transport, cinema, hotels
        "reduced": 15,  # Food and drink
        "standard": 25,
    },
    "grocery_categories": ["grocery"],
}

# Deduction rules per organisation family
COMPLIANCE_CONFIG = {
    "board_approval_threshold": 5000,  # NOK, association purchases above this need board approval
    "documentation_threshold": 1000,  # NOK, purchases above this need voucher number and purpose
    "base_documents": ["Original receipt"],
    "extended_documents": ["Voucher number (bilagsnummer)", "Date and purpose of purchase"],
}

# Predictive analytics
PREDICTION_CONFIG = {
    "timeframe_multipliers": {
        "next_month": 1,
        "next_quarter": 3,
        "next_year": 12,
    },
    "grocery_multiplier": 1.1,
    "alcohol_winter_multiplier": 1.3,  # December spend above June spend
    "alcohol_summer_multiplier": 0.9,
    "base_confidence": 0.6,
    "confidence_per_nok": 1 / 20000,
    "max_confidence": 0.95,
    "increasing_trend_threshold": 5000,  # NOK per category
    "emergency_reserve_share": 0.15,
    "seasonal_events_share": 0.25,
    "seasonal_trends_factor": 1.1,
    "budget_forecast_factor": 1.15,
}

# Learning store retention and locking
LEARNING_CONFIG = {
    "increase_step": 0.1,  # Applied when confidence_rating > high_rating_threshold
    "decrease_step": 0.05,
    "high_rating_threshold": 7,
    "min_adjustment": 0.1,
    "max_adjustment": 0.99,
    "lock_timeout_seconds": 2.0,
    "max_corrections": None,  # None = keep every correction
    "correction_eviction_batch": 1000,
    "max_training_examples": 10000,
    "training_eviction_batch": 1000,
}

# Fine-tuning simulation
TRAINING_CONFIG = {
    "accuracy_floor": 0.85,
    "accuracy_ceiling": 0.99,
    "base_loss": 0.5,
    "default_learning_rate": 1e-4,  # Learning rate the convergence curve is calibrated for
}

# Service metadata reported by ReceiptAnalysisEngine.service_info()
SERVICE_CONFIG = {
    "service": "receipt-engine",
    "version": "0.1.0",
}
