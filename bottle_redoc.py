import copy
import logging
from bottle import response as bottle_response
from bottle_redoc_ui import (DEFAULT_CONFIG, DEFAULT_SPEC_URL, DEFAULT_TITLE, RedocOptionsError, RenderConfig,
                             render_redoc_html)

__all__ = ['HTML_CONTENT_TYPE', 'RedocHandler', 'RedocOptionsError', 'RedocPlugin', 'RenderConfig', 'redoc_handler']

log = logging.getLogger(__name__)

HTML_CONTENT_TYPE = 'text/html; charset=UTF-8'


class RedocHandler(object):
    """
    Request handler serving the ReDoc page for one fixed config.

    Usable as a plain Bottle route callback (``app.get('/docs', callback=RedocHandler(...))``)
    or called directly with an explicit response object.
    """

    def __init__(self, config=DEFAULT_CONFIG):
        """
        :param config: The page config, or an options mapping such as
            ``{'title': 'My API', 'specUrl': '/openapi.json', 'redocOptions': {...}}``.
        :type config: RenderConfig | dict
        """
        if not isinstance(config, RenderConfig):
            config = RenderConfig.from_options(config)
        self.config = config._replace(redoc_options=copy.deepcopy(config.redoc_options))
        # Fail at registration rather than on the first request.
        render_redoc_html(self.config)
        log.debug("Built ReDoc handler for %s", self.config.spec_url)

    def __call__(self, request=None, response=None, **url_args):
        """
        Write the rendered page to the response and return it.

        The request and any route arguments are ignored.

        :param response: Anything with settable ``content_type`` and ``body`` attributes.
            Defaults to Bottle's thread-local response.
        :rtype: str
        """
        if response is None:
            response = bottle_response
        html = render_redoc_html(self.config)
        response.content_type = HTML_CONTENT_TYPE
        response.body = html
        return html


def redoc_handler(config=DEFAULT_CONFIG):
    return RedocHandler(config)


class RedocPlugin(object):
    DEFAULT_DOCS_SUBURL = '/redoc'
    DEFAULT_SPEC_SUBURL = '/openapi.json'

    name = 'redoc'
    api = 2

    def __init__(self, title=DEFAULT_TITLE,
                 spec_url=None,
                 nonce='',
                 redoc_options=None,
                 docs_suburl=DEFAULT_DOCS_SUBURL,
                 spec_def=None,
                 spec_suburl=DEFAULT_SPEC_SUBURL,
                 name=None):
        """
        Serve ReDoc documentation from your Bottle application.

        :param title: The page title.
        :type title: str
        :param spec_url: URL of the OpenAPI document to display. Defaults to spec_suburl when spec_def is given,
            otherwise to the Petstore example.
        :type spec_url: str
        :param nonce: Content-Security-Policy nonce for the ReDoc script tag.
        :type nonce: str
        :param redoc_options: ReDoc configuration passed through to Redoc.init.
        :type redoc_options: dict
        :param docs_suburl: The path to serve the documentation page on.
        :type docs_suburl: str
        :param spec_def: An OpenAPI document, as a Python dictionary, to serve alongside the page.
        :type spec_def: dict
        :param spec_suburl: The path to serve spec_def on.
        :type spec_suburl: str
        :param name: Plugin name, needed when installing more than one instance on an app.
        :type name: str
        """
        if spec_url is None:
            spec_url = spec_suburl if spec_def is not None else DEFAULT_SPEC_URL

        if name is not None:
            self.name = name

        self.docs_suburl = docs_suburl
        self.spec_def = spec_def
        self.spec_suburl = spec_suburl
        self.handler = RedocHandler(RenderConfig(title, spec_url, nonce, redoc_options))

    def setup(self, app):
        app.get(self.docs_suburl, name='{}_docs'.format(self.name), callback=self.handler)
        log.debug("Serving ReDoc page %r on %s", self.handler.config.title, self.docs_suburl)

        if self.spec_def is not None:
            @app.get(self.spec_suburl, name='{}_spec'.format(self.name))
            def openapi_spec():
                return self.spec_def

            log.debug("Serving OpenAPI document on %s", self.spec_suburl)

    def apply(self, callback, route):
        return callback
