import logging

from duck_proxy.app_factory import create_app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    app.logger.info("Duck Proxy listening on http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"], threaded=True)

#############################
#
# Key design patterns used
# •	Application Factory: create_app() builds the app and dependencies.
# •	Dependency Injection (manual): the fetcher, transformer and normalizer are passed into ProxyService.
# •	Service Layer: ProxyService runs one normalize -> fetch -> transform pass.
# •	Port / Adapter: Fetcher is the port, RequestsFetcher the requests-based adapter.
# •	Strategy: UrlNormalizer allows you to swap normalization logic.
######################################################################
# Runtime request flow
# •	GET /                       -> index.html (search box)
# •	GET /proxy?url=<anything>
# •	  SearchFallbackUrlNormalizer: full URL | bare host -> https:// | DuckDuckGo search
# •	  blank input               -> 400 "Missing url parameter", nothing fetched
# •	  RequestsFetcher.fetch     -> FetchedResponse (body still on the wire)
# •	  ResponseTransformer:
# •	    text/html               -> buffer, rewrite href/src to /proxy?url=..., add banner
# •	    anything else           -> stream, minus content-encoding / transfer-encoding
# •	  fetch/read failure        -> 500 "Proxy error: ..."
# •	GET /<anything else>        -> index.html
