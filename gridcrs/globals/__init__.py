from . import directories
from . import configs
from .logutil import Logger, info, process_step, warn, error, success, setting_config
from .config_models import AxisConfig, GridConfig, read_config_file
