from .normalize import build_dataset, coerce_labels, coerce_series, dataset_from_frame

__all__ = ["build_dataset", "coerce_labels", "coerce_series", "dataset_from_frame"]
