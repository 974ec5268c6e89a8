import logging

base_logger = logging.getLogger("xzsink")


class Adapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        parts = [self.extra["component"].upper()]
        if site := self.extra.get("site"):
            parts.append(site)
        parts.append(msg)
        return " :: ".join(parts), kwargs
