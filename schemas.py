# schemas.py
CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "server": {
            "type": "object",
            "properties": {
                "host": {"type": "string", "minLength": 1},
                "port": {"type": "integer", "minimum": 0, "maximum": 65535},
                "debug": {"type": "boolean"},
                "cors_allow_origins": {
                    "type": "array",
                    "items": {"type": "string"}
                }
            },
            "additionalProperties": False
        },
        "static": {
            "type": "object",
            "properties": {
                "directory": {"type": "string", "minLength": 1},
                "index": {"type": "string", "minLength": 1, "pattern": "^[^/\\\\]+$"},
                "directory_index": {"type": "boolean"},
                "dotfiles": {"type": "string", "enum": ["ignore", "allow"]},
                "max_age": {"type": "integer", "minimum": 0}
            },
            "additionalProperties": False
        }
    },
    "additionalProperties": False
}

DEFAULTS = {
    "server": {
        "host": "0.0.0.0",
        "port": 3000,
        "debug": False,
        "cors_allow_origins": ["*"]
    },
    "static": {
        "directory": "public",
        "index": "index.html",
        "directory_index": True,
        "dotfiles": "ignore",
        "max_age": 0
    }
}

# Liveness payload answered on /health
HEALTH_PAYLOAD = {"status": "healthy"}
