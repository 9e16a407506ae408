"""Writers that persist exported entity configs."""

from registry_exporter.exporters.json_export import JSONConfigWriter, config_filename

__all__ = ["JSONConfigWriter", "config_filename"]
