"""Stand-ins for the requests session and Mapbox-shaped response bodies."""

import json

import requests


class FakeResponse:
    """Mimics the parts of requests.Response the adapters use."""

    def __init__(self, body, status_code=200):
        self.status_code = status_code
        self.text = body if isinstance(body, str) else json.dumps(body)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error", response=self)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records every call."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({'url': url, 'params': params, 'timeout': timeout})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, FakeResponse):
            return reply
        return FakeResponse(reply)


def make_feature(place_name, center, context=None):
    feature = {'type': 'Feature', 'place_name': place_name, 'center': center}
    if context is not None:
        feature['context'] = context
    return feature


def geocode_body(*features):
    return {'type': 'FeatureCollection', 'features': list(features)}


def directions_body(*routes):
    return {'code': 'Ok', 'routes': list(routes)}


def make_route(distance, duration, coordinates=None):
    return {
        'distance': distance,
        'duration': duration,
        'geometry': {'type': 'LineString', 'coordinates': coordinates or []},
    }
