from condenserlab.view.panels.assistant import AssistantPanel
from condenserlab.view.panels.bench import BenchPanel
from condenserlab.view.panels.readings import ReadingsPanel
from condenserlab.view.panels.stopwatch import StopwatchPanel

__all__ = ["AssistantPanel", "BenchPanel", "ReadingsPanel", "StopwatchPanel"]
