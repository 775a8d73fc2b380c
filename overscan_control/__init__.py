from .collaborators import AxisWriter, JsonOutputModeProvider, OutputModeProvider, SysfsAxisWriter
from .config import ControllerConfig, load_controller_config
from .display_modes import MODE_BOUNDS, resolve_bound
from .overscan_geometry import Bound, PreviousRectangle, Rectangle, apply_percent, derive_initial_percent
from .position_manager import DisplayPositionManager

__version__ = "0.1.0"

__all__ = [
    "AxisWriter",
    "Bound",
    "ControllerConfig",
    "DisplayPositionManager",
    "JsonOutputModeProvider",
    "MODE_BOUNDS",
    "OutputModeProvider",
    "PreviousRectangle",
    "Rectangle",
    "SysfsAxisWriter",
    "apply_percent",
    "derive_initial_percent",
    "load_controller_config",
    "resolve_bound",
    "__version__",
]
