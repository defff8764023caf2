"""Input builders shared by the test modules"""


def model_input(**overrides):
    data = {
        "name": "Churn classifier",
        "description": "Gradient boosted trees",
        "model_type": "traditional_ml",
        "framework": "scikit-learn",
        "file_path": "/models/churn.pkl",
        "file_size": 1024,
        "metadata": {"version": "1.0"},
    }
    data.update(overrides)
    return data


def dataset_input(**overrides):
    data = {
        "name": "Customers",
        "description": "Customer snapshot",
        "file_type": "csv",
        "file_path": "/datasets/customers.csv",
        "file_size": 2048,
        "columns": ["age", "income", "churned"],
        "row_count": 500,
        "metadata": None,
    }
    data.update(overrides)
    return data


def analysis_input(model_id, dataset_id, **overrides):
    data = {
        "name": "Why do customers churn",
        "model_id": model_id,
        "dataset_id": dataset_id,
        "analysis_type": "feature_importance",
        "parameters": {"top_k": 5},
    }
    data.update(overrides)
    return data


def visualization_input(analysis_id, **overrides):
    data = {
        "analysis_id": analysis_id,
        "chart_type": "bar_chart",
        "config": {"title": "Importance", "xAxis": "Features"},
        "data": {"labels": ["age", "income"], "values": [0.7, 0.3]},
    }
    data.update(overrides)
    return data


NESTED_MAP = {
    "layers": [{"name": "dense", "units": 64, "activation": None}, {"name": "out", "units": 1}],
    "scores": [0.5, 1, -2.25, True, False, None],
    "nested": {"deep": {"deeper": ["a", {"b": []}]}, "empty": {}},
    "label": "ünïcode",
}
