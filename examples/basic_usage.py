# examples/basic_usage.py
from pathlib import Path

from pinus_hybrid import classify, classify_batch, classify_with_visual_features, evaluate, load_training_set

data = Path(__file__).parent / "data"
training = load_training_set(data / "training.csv")

r = classify((0.28, 5.5), training, k=3)
print("Prediction:", r.predicted_label, f"{r.confidence:.2f}")
print("Votes:", r.vote_breakdown)
print("CF:", r.cf_breakdown)
print("Hybrid:", r.hybrid_breakdown)

rv = classify_with_visual_features(
    (0.28, 5.5),
    training,
    {"bark_texture": 0.8, "leaf_density": 0.3, "branch_pattern": 0.7},
)
print("With visual scores:", rv.final_breakdown)

batch = classify_batch([(0.2, 4.5), (0.33, 26.0)], training)
print("Batch k:", batch.k, batch.summary)

rep = evaluate(training)
print(f"In-sample accuracy: {rep.accuracy}% ({rep.correct}/{rep.total})")
