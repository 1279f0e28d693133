from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@dataclass(frozen=True)
class ParameterColumns:
    """Panel column names for the six NSS parameters and the observation date."""
    beta0: str = "BETA0"
    beta1: str = "BETA1"
    beta2: str = "BETA2"
    beta3: str = "BETA3"
    tau1: str = "TAU1"
    tau2: str = "TAU2"
    date: str = "date"

    @property
    def parameters(self) -> tuple[str, ...]:
        return (self.beta0, self.beta1, self.beta2, self.beta3, self.tau1, self.tau2)


@dataclass(frozen=True)
class Settings:
    # Paths
    data_dir: Path = PROJECT_ROOT / "data"
    raw_dir: Path = data_dir / "raw"
    processed_dir: Path = data_dir / "processed"
    output_dir: Path = PROJECT_ROOT / "outputs"

    # Curve evaluation
    snapshot_maturities: tuple[float, ...] = (0.25, 0.5, 1, 2, 5, 10, 30)
    risk_free_maturity: float = 0.25
    panel_face_value: float = 100.0
    four_factor_epsilon: float = 1e-10
    min_aged_maturity: float = 0.001

    # Source data conventions
    missing_flag: float = -999.99
    max_gap_days: int = 7
    gsw_header_line: int = 9  # zero-based line holding the column header in feds200628.csv

    # Yield-to-maturity solver
    ytm_bracket: tuple[float, float] = (0.0, 0.25)
    ytm_bracket_expansion: float = 2.0
    ytm_max_bracket_attempts: int = 25
    ytm_xtol: float = 1e-12
    ytm_max_iter: int = 200

    # Synthetic data
    start_date: str = "1980-01-01"
    end_date: str = "1989-12-31"


settings = Settings()
columns = ParameterColumns()
