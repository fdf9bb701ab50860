import os

import pytest

from ui_quality.accumulator import RunAccumulator
from ui_quality.models import Bounds, DisplayMetrics, ElementKind, UiNode


def make_node(kind=ElementKind.OTHER, left=0, top=0, width=0, height=0, **kwargs):
    return UiNode(
        kind=kind,
        bounds=Bounds(left=left, top=top, right=left + width, bottom=top + height),
        **kwargs
    )


@pytest.fixture
def display():
    # 1 px == 1 dp on a 200 x 200 screen
    return DisplayMetrics(density=1.0, width_px=200, height_px=200)


@pytest.fixture
def acc():
    return RunAccumulator()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    env = {k: v for k, v in os.environ.items() if not k.startswith("UIQ_")}
    env["HOME"] = str(tmp_path)
    monkeypatch.setattr(os, "environ", env)
    monkeypatch.chdir(tmp_path)
    return env


WINDOW_DUMP = """<?xml version='1.0' encoding='UTF-8' standalone='yes' ?>
<hierarchy rotation="0">
  <node index="0" text="" resource-id="" class="android.widget.FrameLayout"
        content-desc="" bounds="[0,0][1080,2400]">
    <node index="0" text="Sign in" resource-id="com.example:id/title"
          class="android.widget.TextView" content-desc="" bounds="[48,120][600,200]" />
    <node index="1" text="" resource-id="com.example:id/email"
          class="android.widget.EditText" content-desc="" bounds="[48,240][1032,360]" />
    <node index="2" text="OK" resource-id="com.example:id/ok"
          class="android.widget.Button" content-desc="" bounds="[48,400][300,526]" />
    <node index="3" text="" resource-id=""
          class="android.widget.ImageView" content-desc="Logo" bounds="[400,400][526,526]" />
  </node>
</hierarchy>
"""
