"""Countries where gift-card rewards may be issued."""

from __future__ import annotations

# ISO 3166-1 alpha-2 codes. Sanctioned and marketplace-unsupported
# jurisdictions are intentionally absent.
ALLOWED_COUNTRIES: frozenset[str] = frozenset(
    {
        "AE", "AG", "AI", "AL", "AM", "AO", "AR", "AT", "AU", "AW",
        "AZ", "BA", "BB", "BD", "BE", "BG", "BH", "BJ", "BM", "BN",
        "BO", "BR", "BS", "BW", "BZ", "CA", "CH", "CI", "CL", "CM",
        "CO", "CR", "CV", "CY", "CZ", "DE", "DK", "DM", "DO", "DZ",
        "EC", "EE", "EG", "ES", "FI", "FJ", "FR", "GA", "GB", "GD",
        "GE", "GH", "GM", "GR", "GT", "GY", "HK", "HN", "HR", "HU",
        "ID", "IE", "IL", "IN", "IS", "IT", "JM", "JO", "JP", "KE",
        "KG", "KH", "KN", "KR", "KW", "KY", "KZ", "LA", "LB", "LC",
        "LK", "LT", "LU", "LV", "MA", "MD", "ME", "MG", "MK", "MN",
        "MO", "MS", "MT", "MU", "MV", "MW", "MX", "MY", "MZ", "NA",
        "NE", "NG", "NI", "NL", "NO", "NP", "NZ", "OM", "PA", "PE",
        "PG", "PH", "PK", "PL", "PT", "PY", "QA", "RO", "RS", "RW",
        "SA", "SC", "SE", "SG", "SI", "SK", "SL", "SN", "SR", "SV",
        "TC", "TG", "TH", "TJ", "TN", "TR", "TT", "TW", "TZ", "UA",
        "UG", "US", "UY", "UZ", "VC", "VG", "VN", "ZA", "ZM",
    }
)


__all__ = ["ALLOWED_COUNTRIES"]
