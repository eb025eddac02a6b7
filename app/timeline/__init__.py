from .axis import TimeAxis
from .models import (
    IncidentBlock,
    LegendEntry,
    QuickJump,
    TimeMarker,
    TimelineCamera,
    TimelineFrame,
    TimelineIncident,
)
from .playback import PLAYBACK_SPEEDS, PlaybackScrubber, PlaybackTicker, ScrubberState
from .viewport import ZOOM_LEVELS, Viewport, ZoomLevel
from .widget import IncidentTimeline
