"""numlab - numerical methods with inspectable iteration traces."""

__version__ = "0.1.0"

# Error theory and floating-point systems
from .analysis import (
    ErrorReport,
    FloatingPointSystem,
    FloatRepresentation,
    approximation_error,
)

# Configuration
from .config import DEFAULT_CONFIG, SolverConfig

# Shared statuses and traces
from .core import IterationRecord, SolverError, Status, Trace

# Expressions
from .expr import (
    EvalError,
    ExpressionEngine,
    SympyEngine,
    default_engine,
    fixed_point_candidates,
)

# Interpolation and fitting
from .interpolate import (
    LagrangeResult,
    LinearFit,
    NewtonResult,
    Polynomial,
    lagrange,
    least_squares_line,
    newton_divided_differences,
)

# Linear systems
from .linalg import (
    CholeskyResult,
    IterativeResult,
    LinearSystemResult,
    LUResult,
    cholesky_decomposition,
    cholesky_solve,
    gauss_elimination,
    gauss_jordan,
    gauss_seidel,
    is_diagonally_dominant,
    jacobi,
    lu_decomposition,
    lu_solve,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Linear programming
from .lp import Constraint, LinearProgram, SimplexResult, simplex

# Initial-value problems
from .ode import ODEResult, euler, heun, midpoint

# Optimization
from .optimize import (
    OptimizeResult,
    backtracking_armijo,
    gradient_method,
    newton_critical_point,
)

# Root finding
from .roots import (
    RootResult,
    false_position,
    find_brackets,
    fixed_point,
    fixed_point_all,
    newton_raphson,
    secant,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "DEFAULT_CONFIG",
    "SolverConfig",
    # Core
    "IterationRecord",
    "SolverError",
    "Status",
    "Trace",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
    # Expressions
    "EvalError",
    "ExpressionEngine",
    "SympyEngine",
    "default_engine",
    "fixed_point_candidates",
    # Linear systems
    "CholeskyResult",
    "IterativeResult",
    "LUResult",
    "LinearSystemResult",
    "cholesky_decomposition",
    "cholesky_solve",
    "gauss_elimination",
    "gauss_jordan",
    "gauss_seidel",
    "is_diagonally_dominant",
    "jacobi",
    "lu_decomposition",
    "lu_solve",
    # Root finding
    "RootResult",
    "false_position",
    "find_brackets",
    "fixed_point",
    "fixed_point_all",
    "newton_raphson",
    "secant",
    # Optimization
    "OptimizeResult",
    "backtracking_armijo",
    "gradient_method",
    "newton_critical_point",
    # Linear programming
    "Constraint",
    "LinearProgram",
    "SimplexResult",
    "simplex",
    # Interpolation and fitting
    "LagrangeResult",
    "LinearFit",
    "NewtonResult",
    "Polynomial",
    "lagrange",
    "least_squares_line",
    "newton_divided_differences",
    # Initial-value problems
    "ODEResult",
    "euler",
    "heun",
    "midpoint",
    # Error theory and floating-point systems
    "ErrorReport",
    "FloatRepresentation",
    "FloatingPointSystem",
    "approximation_error",
]
