from .codec import decode_result, encode_result  # noqa: F401
from .dataset_csv import dataset_from_csv, dataset_to_csv  # noqa: F401
