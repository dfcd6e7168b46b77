"""
Unit tests for User-Agent device classification.
"""
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from content_fixtures import DESKTOP_UA, IPAD_UA, IPHONE_UA
from folio_site.content.device import DESKTOP, PHONE, TABLET, classify_device

ANDROID_PHONE_UA = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)
GOOGLEBOT_UA = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"


def test_phones():
    for agent in (IPHONE_UA, ANDROID_PHONE_UA):
        device = classify_device(agent)
        assert device.kind == PHONE, f"{agent} classified as {device.kind}"
        assert device.is_phone and not device.is_tablet and not device.is_desktop

    print("PASS: Phones classified as phone")


def test_tablet():
    device = classify_device(IPAD_UA)
    assert device.kind == TABLET, device.kind
    assert device.is_tablet and not device.is_phone and not device.is_desktop

    print("PASS: iPad classified as tablet")


def test_desktop_is_default():
    for agent in (DESKTOP_UA, GOOGLEBOT_UA, "", None, "Quart"):
        device = classify_device(agent)
        assert device.kind == DESKTOP, f"{agent!r} classified as {device.kind}"
        assert device.is_desktop

    print("PASS: Desktop is the default classification")


if __name__ == "__main__":
    test_phones()
    test_tablet()
    test_desktop_is_default()
    print("\nAll device tests passed.")
