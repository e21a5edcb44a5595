"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


PERMISSION_LINE = (
    "W/ActivityManager( 1234): Permission Denial: starting Intent "
    "{ act=android.media.action.IMAGE_CAPTURE cmp=com.example/.CameraActivity } "
    "from ProcessRecord{4a1b com.example} (pid=4321, uid=10123) "
    "requires android.permission.CAMERA"
)
APP_OP_LINE = "W/AppOps  ( 1234): Op: AppOps policy rejected action op=CAMERA"
COMPONENT_LINE = "W/ActivityManager( 1234): Unable to start service: com.example/.MyService"
NOISE_LINE = "I/ActivityManager( 1234): Displayed com.example/.MainActivity: +512ms"


@pytest.fixture
def permission_line():
    """A permission denial naming the required permission."""
    return PERMISSION_LINE


@pytest.fixture
def app_op_line():
    """An AppOps rejection line."""
    return APP_OP_LINE


@pytest.fixture
def component_line():
    """A blocked service start line."""
    return COMPONENT_LINE


@pytest.fixture
def sample_log_lines():
    """A captured log excerpt mixing issues with ordinary output."""
    return [
        NOISE_LINE,
        PERMISSION_LINE,
        "",
        APP_OP_LINE,
        "D/com.example( 4321): onResume",
        COMPONENT_LINE,
        NOISE_LINE,
    ]


@pytest.fixture
def sample_issues(sample_log_lines):
    """Issues classified from the sample log excerpt."""
    from grapheneos_tuner.classification.engine import classify_lines

    return classify_lines(sample_log_lines)
