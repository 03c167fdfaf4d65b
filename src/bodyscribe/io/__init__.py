from bodyscribe.io.measurements import load_measurements_json
from bodyscribe.io.obj import ObjSerializer, format_timestamp, save_obj_file

__all__ = ["ObjSerializer", "format_timestamp", "save_obj_file", "load_measurements_json"]
