from .logger import Logger
from .metrics import EpisodeMetrics
from .plotter import Plotter
from .regret import RegretAnalyzer

__all__ = ["EpisodeMetrics", "Logger", "Plotter", "RegretAnalyzer"]
