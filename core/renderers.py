"""
Core — Response Renderer

Successful responses are wrapped as
  { "success": true, "data": ..., "meta": {...} }
Error responses already carry the envelope built by
core.exceptions.standard_exception_handler and pass through untouched.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer

PAGINATION_KEYS = ('count', 'pages', 'next', 'previous')


class StandardJSONRenderer(JSONRenderer):

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')
        if response is not None and (response.status_code >= 400 or response.status_code == 204):
            return super().render(data, accepted_media_type, renderer_context)
        return super().render(self.wrap(data), accepted_media_type, renderer_context)

    @staticmethod
    def wrap(data):
        if isinstance(data, dict) and 'success' in data:
            return data
        if isinstance(data, dict) and 'results' in data:
            return {
                'success': True,
                'data': data['results'],
                'meta': {key: data.get(key) for key in PAGINATION_KEYS},
            }
        return {'success': True, 'data': data}
