import os
from collections import namedtuple
from bottle import SimpleTemplate, json_dumps

REDOC_UI_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')
REDOC_INDEX_TEMPLATE_PATH = os.path.join(REDOC_UI_DIR, 'index.html.st')

with open(REDOC_INDEX_TEMPLATE_PATH, 'r', encoding='utf-8') as f:
    REDOC_INDEX_TEMPLATE = f.read()

# Compiled once, shared by every render call. SimpleTemplate keeps no per-render state.
_INDEX_TEMPLATE = SimpleTemplate(REDOC_INDEX_TEMPLATE)

DEFAULT_TITLE = 'ReDoc'
DEFAULT_SPEC_URL = 'http://petstore.swagger.io/v2/swagger.json'

# Option names accepted by RenderConfig.from_options, mapped to field names.
_OPTION_KEYS = {
    'title': 'title',
    'specUrl': 'spec_url',
    'spec_url': 'spec_url',
    'nonce': 'nonce',
    'redocOptions': 'redoc_options',
    'redoc_options': 'redoc_options',
}


class RedocOptionsError(ValueError):
    """Raised when the ReDoc options cannot be serialized to JSON."""


class RenderConfig(namedtuple('RenderConfig', ['title', 'spec_url', 'nonce', 'redoc_options'])):
    """
    Everything needed to render the ReDoc page.

    :param title: Text for the page's <title> element. Inserted as-is.
    :type title: str
    :param spec_url: URL of the OpenAPI/Swagger document the viewer loads. Never parsed.
    :type spec_url: str
    :param nonce: Content-Security-Policy nonce for the viewer script tag.
    :type nonce: str
    :param redoc_options: Viewer options, passed to Redoc.init as JSON.
    :type redoc_options: dict | list | any JSON value
    """
    __slots__ = ()

    def __new__(cls, title, spec_url, nonce='', redoc_options=None):
        if nonce is None:
            nonce = ''
        if redoc_options is None:
            redoc_options = {}
        return super(RenderConfig, cls).__new__(cls, title, spec_url, nonce, redoc_options)

    @classmethod
    def from_options(cls, options):
        """
        Build a config from an options mapping, e.g. ``{'title': ..., 'specUrl': ...}``.

        Both the camelCase names (specUrl, redocOptions) and the field names are accepted.
        """
        fields = {'title': DEFAULT_TITLE, 'spec_url': DEFAULT_SPEC_URL}
        for key, value in dict(options).items():
            try:
                fields[_OPTION_KEYS[key]] = value
            except KeyError:
                raise TypeError('Unknown ReDoc option: {!r}'.format(key))
        return cls(**fields)


DEFAULT_CONFIG = RenderConfig(DEFAULT_TITLE, DEFAULT_SPEC_URL)


def dump_redoc_options(redoc_options):
    try:
        return json_dumps(redoc_options, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise RedocOptionsError('ReDoc options are not JSON serializable: {}'.format(e)) from e


def render_redoc_html(config=DEFAULT_CONFIG):
    """
    Render the ReDoc index page for the given config.

    Title, spec URL and nonce are inserted without any escaping; callers must not pass
    untrusted values through here.

    :type config: RenderConfig
    :rtype: str
    """
    return _INDEX_TEMPLATE.render(title=config.title,
                                  spec_url=config.spec_url,
                                  nonce=config.nonce,
                                  redoc_options_json=dump_redoc_options(config.redoc_options))
