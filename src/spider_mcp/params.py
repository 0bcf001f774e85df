"""Tool parameter models.

Each tool takes one model. Every recognized option is a named field and
anything else is rejected, so the request body sent to the API only ever
contains documented options.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RequestType = Literal["http", "chrome", "smart"]
ReturnFormat = Literal["markdown", "commonmark", "raw", "text", "xml", "bytes", "empty"]
ProxyType = Literal["residential", "mobile", "isp", "datacenter"]
RedirectPolicy = Literal["Loose", "Strict", "None"]
CronSchedule = Literal["daily", "weekly", "monthly"]

ReturnFormatOption = ReturnFormat | list[str]

# Counts, delays and timeouts accept any JSON number; integers stay integers.
Number = int | float


class ToolParams(BaseModel):
    """Base for all tool parameter models."""

    model_config = ConfigDict(extra="forbid")


class Viewport(ToolParams):
    width: Number | None = None
    height: Number | None = None
    device_scale_factor: float | None = None
    emulating_mobile: bool | None = None
    is_landscape: bool | None = None
    has_touch: bool | None = None


class TransformInput(ToolParams):
    html: str = Field(description="HTML content to transform")
    url: str | None = Field(None, description="Source URL (optional, used for readability)")


class PageOptions(ToolParams):
    """Options shared by crawl, scrape and unblocker."""

    url: str = Field(description="The URL to crawl. Can be comma-separated for multiple URLs.")
    request: RequestType | None = Field(None, description="Request type. Default: smart")
    return_format: ReturnFormatOption | None = Field(None, description="Output format. Default: raw")
    readability: bool | None = Field(None, description="Use readability algorithm for content preprocessing")
    return_page_links: bool | None = Field(None, description="Return links found on each page")
    return_json_data: bool | None = Field(None, description="Return JSON data from SSR scripts")
    return_headers: bool | None = Field(None, description="Return HTTP response headers")
    return_cookies: bool | None = Field(None, description="Return HTTP response cookies")
    metadata: bool | None = Field(None, description="Collect page metadata (title, description, keywords)")
    css_extraction_map: dict[str, Any] | None = Field(
        None, description="CSS/XPath selectors to scrape specific content per path"
    )
    root_selector: str | None = Field(None, description="Root CSS query selector for content extraction")
    exclude_selector: str | None = Field(None, description="CSS selector for content to ignore")
    filter_output_images: bool | None = Field(None, description="Filter images from output")
    filter_output_svg: bool | None = Field(None, description="Filter SVG tags from output")
    filter_output_main_only: bool | None = Field(None, description="Filter nav, aside, footer from output")
    filter_svg: bool | None = Field(None, description="Filter SVG elements from markup")
    filter_images: bool | None = Field(None, description="Filter image elements from markup")
    filter_main_only: bool | None = Field(None, description="Filter to main content only. Default: enabled")
    clean_html: bool | None = Field(None, description="Clean HTML of unwanted attributes")
    proxy_enabled: bool | None = Field(None, description="Enable premium proxies. Multiplies cost by 1.5x")
    proxy: ProxyType | None = Field(None, description="Proxy pool type")
    remote_proxy: str | None = Field(None, description="External proxy connection URL")
    country_code: str | None = Field(None, description="ISO country code for proxy (e.g. 'gb')")
    fingerprint: bool | None = Field(None, description="Advanced fingerprint detection for Chrome. Default: true")
    cookies: str | None = Field(None, description="HTTP cookies for SSR authentication")
    external_domains: list[str] | None = Field(None, description="External domains to include. Use ['*'] for all")
    subdomains: bool | None = Field(None, description="Allow subdomains")
    tld: bool | None = Field(None, description="Allow TLDs")
    blacklist: list[str] | None = Field(None, description="Paths to exclude (supports regex)")
    whitelist: list[str] | None = Field(None, description="Paths to include (supports regex)")
    redirect_policy: RedirectPolicy | None = Field(None, description="Redirect policy. Default: Loose")
    concurrency_limit: Number | None = Field(None, description="Concurrency limit for slower websites")
    respect_robots: bool | None = Field(None, description="Respect robots.txt. Default: true")
    cache: bool | dict[str, Any] | None = Field(
        None, description="HTTP caching. Object: {maxAge, allowStale, period}"
    )
    storageless: bool | None = Field(None, description="Prevent data storage. Default: true")
    session: bool | None = Field(None, description="Persist HTTP headers and cookies. Default: true")
    user_agent: str | None = Field(None, description="Custom HTTP user agent")
    full_resources: bool | None = Field(None, description="Download all website resources including assets")
    sitemap: bool | None = Field(None, description="Include links from sitemaps")
    sitemaps: list[str] | None = Field(None, description="Specific sitemap URLs to use")
    request_timeout: Number | None = Field(None, description="HTTP request timeout in ms")
    request_max_retries: Number | None = Field(None, description="Maximum request retries")
    request_redirect_limit: Number | None = Field(None, description="Maximum redirects to follow")
    budget: dict[str, Number] | None = Field(None, description="Crawl budget by path (e.g. {'*':100})")
    chunking_alg: dict[str, Any] | None = Field(
        None, description="Segment content: bysentence, bylines, bycharacterlength, bywords"
    )
    automation: dict[str, Any] | None = Field(
        None, description="Web automation actions (Click, Fill, Wait, Scroll, etc.)"
    )
    preserve_host: bool | None = Field(None, description="Preserve HOST header")
    event_tracker: dict[str, Any] | None = Field(None, description="Track requests, responses, automation")
    disable_intercept: bool | None = Field(None, description="Disable request interception")
    block_ads: bool | None = Field(None, description="Block advertisements. Default: true")
    block_analytics: bool | None = Field(None, description="Block analytics. Default: true")
    block_stylesheets: bool | None = Field(None, description="Block stylesheets. Default: true")
    run_in_background: bool | None = Field(
        None, description="Run in background. Requires storageless=false or webhooks"
    )
    viewport: Viewport | None = Field(None, description="Device viewport settings")
    locale: str | None = Field(None, description="Locale for content (e.g. 'en-US')")
    timezone: str | None = Field(None, description="Timezone for content")
    timeout: Number | None = Field(None, description="Overall request timeout")
    webhooks: dict[str, Any] | None = Field(
        None, description="Webhook config for events (on_find, on_credits_depleted, etc.)"
    )
    cron: CronSchedule | None = Field(None, description="Schedule crawl")


class ScreenshotOptions(ToolParams):
    screenshot: bool | None = Field(None, description="Enable screenshot capture")
    binary: bool | None = Field(None, description="Return image as binary instead of base64")
    full_page: bool | None = Field(None, description="Screenshot full page. Default: true")
    block_images: bool | None = Field(None, description="Block image loading")
    omit_background: bool | None = Field(None, description="Omit background")
    cdp_params: dict[str, Any] | None = Field(None, description="Chrome DevTools Protocol settings")


class CrawlParams(PageOptions):
    limit: Number | None = Field(None, description="Maximum pages to crawl per website. 0 for all pages. Default: 0")
    depth: Number | None = Field(None, description="Maximum crawl depth. Default: 25. 0 for no limit.")
    delay: Number | None = Field(None, description="Crawl delay in ms (max 60000). Disables concurrency")


class ScrapeParams(PageOptions, ScreenshotOptions):
    """Crawl options without limit, depth and delay, plus screenshot capture."""


class SearchParams(ToolParams):
    search: str = Field(description="The search query to perform")
    search_limit: Number | None = Field(None, description="Max URLs to fetch from results. 0 for all")
    num: Number | None = Field(None, description="Maximum number of results to return")
    fetch_page_content: bool | None = Field(None, description="Fetch full website content. Default: false")
    country: str | None = Field(None, description="Two-letter country code (e.g. 'us')")
    location: str | None = Field(None, description="Location origin (e.g. 'United Kingdom')")
    language: str | None = Field(None, description="Two-letter language code (e.g. 'en')")
    tbs: str | None = Field(
        None,
        description="Time range: qdr:h (hour), qdr:d (24h), qdr:w (week), qdr:m (month), qdr:y (year)",
    )
    page: Number | None = Field(None, description="Page number for results")
    quick_search: bool | None = Field(None, description="Prioritize speed over quantity")
    auto_pagination: bool | None = Field(None, description="Auto-paginate to exact desired result count")
    url: str | None = Field(None, description="Optional URL context")
    limit: Number | None = Field(None, description="Page crawl limit for fetched results")
    return_format: ReturnFormatOption | None = Field(None, description="Output format for fetched content")
    request: RequestType | None = Field(None, description="Request type")
    proxy_enabled: bool | None = Field(None, description="Enable premium proxies")
    cookies: str | None = Field(None, description="HTTP cookies")


class LinksParams(ToolParams):
    url: str = Field(description="The URL to extract links from")
    limit: Number | None = Field(None, description="Maximum links to return")
    return_format: ReturnFormatOption | None = Field(None, description="Output format")
    request: RequestType | None = Field(None, description="Request type")


class ScreenshotParams(ScreenshotOptions):
    url: str = Field(description="The URL to screenshot")
    viewport: Viewport | None = Field(None, description="Device viewport settings")
    proxy_enabled: bool | None = Field(None, description="Enable premium proxies")
    country_code: str | None = Field(None, description="ISO country code for proxy")
    fingerprint: bool | None = Field(None, description="Advanced fingerprint detection")
    cookies: str | None = Field(None, description="HTTP cookies")
    automation: dict[str, Any] | None = Field(None, description="Web automation actions before screenshot")
    block_ads: bool | None = Field(None, description="Block advertisements")
    block_analytics: bool | None = Field(None, description="Block analytics")
    block_stylesheets: bool | None = Field(None, description="Block stylesheets")
    locale: str | None = Field(None, description="Locale")
    timezone: str | None = Field(None, description="Timezone")
    timeout: Number | None = Field(None, description="Request timeout")


class TransformParams(ToolParams):
    data: list[TransformInput] = Field(description="List of HTML data to transform")
    return_format: ReturnFormatOption | None = Field(None, description="Output format")
    readability: bool | None = Field(None, description="Use readability preprocessing")
    clean_full: bool | None = Field(None, description="Clean HTML fully")
    clean: bool | None = Field(None, description="Clean for AI (remove footers, navigation)")


class CreditsParams(ToolParams):
    pass


class AICrawlParams(ToolParams):
    url: str = Field(description="The URL to crawl")
    prompt: str = Field(
        description="Natural language prompt to guide the crawl "
        "(e.g. 'Find all product pages and extract pricing')"
    )
    limit: Number | None = Field(None, description="Maximum pages to crawl")
    return_format: ReturnFormatOption | None = Field(None, description="Output format")
    request: RequestType | None = Field(None, description="Request type")
    proxy_enabled: bool | None = Field(None, description="Enable premium proxies")
    cookies: str | None = Field(None, description="HTTP cookies")


class AIScrapeParams(ToolParams):
    url: str = Field(description="The URL to scrape")
    prompt: str = Field(
        description="Natural language extraction prompt "
        "(e.g. 'Extract article title, author, and publish date')"
    )
    return_format: ReturnFormatOption | None = Field(None, description="Output format")
    request: RequestType | None = Field(None, description="Request type")
    proxy_enabled: bool | None = Field(None, description="Enable premium proxies")
    cookies: str | None = Field(None, description="HTTP cookies")


class AISearchParams(ToolParams):
    search: str = Field(description="The search query")
    prompt: str | None = Field(None, description="Additional AI guidance for search results")
    num: Number | None = Field(None, description="Maximum results")
    fetch_page_content: bool | None = Field(None, description="Fetch full page content")
    country: str | None = Field(None, description="Two-letter country code")
    language: str | None = Field(None, description="Two-letter language code")
    tbs: str | None = Field(None, description="Time range filter")
    return_format: ReturnFormatOption | None = Field(None, description="Output format")


class AIBrowserParams(ToolParams):
    url: str = Field(description="The URL to automate")
    prompt: str = Field(
        description="Natural language automation instructions "
        "(e.g. 'Click the login button, fill in email field, submit')"
    )
    return_format: ReturnFormatOption | None = Field(None, description="Output format")
    proxy_enabled: bool | None = Field(None, description="Enable premium proxies")
    cookies: str | None = Field(None, description="HTTP cookies")


class AILinksParams(ToolParams):
    url: str = Field(description="The URL to extract links from")
    prompt: str = Field(
        description="Natural language link filter "
        "(e.g. 'Find all product pages and documentation links')"
    )
    limit: Number | None = Field(None, description="Maximum links")
    return_format: ReturnFormatOption | None = Field(None, description="Output format")
    request: RequestType | None = Field(None, description="Request type")


def to_request_body(params: ToolParams) -> dict[str, Any]:
    """Serialize validated params, leaving out every option that was not set."""
    return params.model_dump(mode="json", exclude_none=True)
