"""helperkit - utility toolkit for a web application client.

helperkit collects the small helpers a web application leans on every day,
built with Python 3.12+, Pydantic Settings, Loguru and HTTPX.

Package overview:
- **core**: Configuration, exceptions, logging, request context, sanitization
- **transforms**: Pure string transforms, validators, PII censoring, JSON parsing
- **http**: Async request pipeline with credential attachment and logging steps
- **storage**: Namespaced key-value store with durable and session backends
- **messages**: Localized message lookup and language resolution

Every transform is total (never raises for any input), while the request
pipeline is an observability layer: it logs and re-raises every transport
failure so call sites stay in control of retries and user messaging.
"""
