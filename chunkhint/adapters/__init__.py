from .html_plugin import HtmlPluginAdapter, HtmlPluginData

__all__: list[str] = ["HtmlPluginAdapter", "HtmlPluginData"]
