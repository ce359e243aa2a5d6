import os
from types import MappingProxyType

# App
APP_TITLE = "CRO ROI Calculator API"
APP_VERSION = "1.2.0"
ALGO_VERSION = "1.2.0-three-track"
LOG_LEVEL = os.getenv("ROICALC_LOG_LEVEL", "INFO").upper()

ALLOW_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:8000",
]

# CVR multiplier per scenario (observed range across ecommerce CRO engagements)
SCENARIO_MULTIPLIERS = MappingProxyType({
    "conservative": 1.15,
    "expected":     1.25,
    "optimistic":   1.40,
})

# Share of the scenario improvement live in a given month; month 3+ is fully ramped
IMPLEMENTATION_CURVE = MappingProxyType({
    1: 0.25,
    2: 0.60,
    3: 1.00,
})

# Exponent applied to the visitor ratio when spend scales (0 = none, 0.5 = aggressive)
CVR_DEGRADATION_FACTOR = 0.3

# Linear CVR lift per month after the ramp completes (improved track only)
MONTHLY_CVR_IMPROVEMENT = 0.01

# Stores at or above this monthly traffic qualify for the recurring service
QUALIFICATION_THRESHOLD = 80_000

# ROI multiples above this usually mean a currency/unit mix-up on input
ROI_SANITY_MULTIPLE = 100.0

INPUT_RANGES = MappingProxyType({
    "monthly_visitors":     {"min": 1_000, "max": 10_000_000, "step": 1_000, "default": 50_000},
    "current_cvr":          {"min": 0.1,   "max": 15,         "step": 0.1,   "default": 2.5},
    "aov":                  {"min": 10,    "max": 5_000,      "step": 5,     "default": 80},
    "ad_spend":             {"min": 0,     "max": 1_000_000,  "step": 100,   "default": 10_000},
    "reinvestment_percent": {"min": 0,     "max": 100,        "step": 5,     "default": 50},
    "monthly_investment":   {"min": 500,   "max": 50_000,     "step": 100,   "default": 4_000},
    "projection_months":    {"min": 6,     "max": 12,         "step": 1,     "default": 6},
})

DEFAULT_SCENARIO = "expected"

DEFAULT_INPUTS = MappingProxyType({
    **{k: v["default"] for k, v in INPUT_RANGES.items()},
    "scenario": DEFAULT_SCENARIO,
})

# Approximate exchange rates vs USD, used only to pre-scale monetary inputs
CURRENCIES = (
    {"code": "USD", "symbol": "$",  "locale": "en-US", "exchange_rate": 1.0},
    {"code": "MXN", "symbol": "$",  "locale": "es-MX", "exchange_rate": 17.0},
    {"code": "COP", "symbol": "$",  "locale": "es-CO", "exchange_rate": 4000.0},
    {"code": "ARS", "symbol": "$",  "locale": "es-AR", "exchange_rate": 900.0},
    {"code": "CLP", "symbol": "$",  "locale": "es-CL", "exchange_rate": 900.0},
    {"code": "PEN", "symbol": "S/", "locale": "es-PE", "exchange_rate": 3.7},
    {"code": "BRL", "symbol": "R$", "locale": "pt-BR", "exchange_rate": 5.0},
)

DEFAULT_CURRENCY = "USD"
