from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    default_credit_hours: float = _float_env("GRADEBOOK_DEFAULT_CREDIT_HOURS", 3.0)
    default_theory_full_marks: float = _float_env("GRADEBOOK_DEFAULT_THEORY_FULL_MARKS", 100.0)
    # report cards fall back to a 4-credit subject when the class subject has none
    report_default_credit_hours: float = _float_env("GRADEBOOK_REPORT_DEFAULT_CREDIT_HOURS", 4.0)

    neb_min_grade_level: int = _int_env("GRADEBOOK_NEB_MIN_GRADE_LEVEL", 11)
    # share of a subject's credit hours printed against theory on NEB sheets
    neb_theory_credit_share: float = _float_env("GRADEBOOK_NEB_THEORY_CREDIT_SHARE", 0.75)


settings = Settings()
