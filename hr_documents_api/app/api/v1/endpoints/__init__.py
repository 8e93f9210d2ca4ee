"""Route modules included by ``api.v1.router``."""
