"""
Simple examples demonstrating the Receipt Engine.
"""

from datetime import date

# Example 1: Classify receipts
print("=" * 60)
print("Example 1: Receipt Classification")
print("=" * 60)

from receipt_engine import Correction, ReceiptAnalysisEngine

engine = ReceiptAnalysisEngine()

receipts = [
    ("REMA 1000 Oslo Melk 34.90 kr Brød 28.50 kr TOTALT 63.40 kr", "association"),
    ("Vinmonopolet Rødvin 349,00 kr", "band"),
    ("Narvesen Kaffe 39 kr", "association"),
    ("XXL Sport telt TOTAL 6499,00 kr", "idrettslag"),
    ("Lokal bakeri 45,00 kr", "AS"),
]

print("\nClassifying receipts:")
for text, org in receipts:
    result = engine.classify(text, organization_type=org, current_date=date(2025, 5, 17))
    print(f"  {text[:30]:30} -> {result.merchant_name} {result.amount:.2f} NOK, "
          f"{result.vat.detected_rate}% MVA (conf: {result.detection.effective_confidence:.3f})")
    print(f"  {'':30}    {result.compliance.deductibility_verdict}")

# Example 2: Corrections raise merchant confidence
print("\n" + "=" * 60)
print("Example 2: Learning From Corrections")
print("=" * 60)

text = receipts[0][0]
before = engine.classify(text, "association").detection.effective_confidence
outcome = engine.submit_correction(Correction(original_text=text, corrected_merchant="Rema1000", confidence_rating=9))
after = engine.classify(text, "association").detection.effective_confidence

print(f"\n  Applied: {outcome.applied}, improvement: {outcome.confidence_improvement}")
print(f"  Confidence before: {before:.3f}, after: {after:.3f}")
print(f"  Simulated fine-tuning: {engine.fine_tune()}")

# Example 3: Spend prediction
print("\n" + "=" * 60)
print("Example 3: Spend Prediction")
print("=" * 60)

history = [
    {"date": f"2024-{month:02d}-15", "merchant": "REMA 1000", "amount": 850.0, "category": "grocery"}
    for month in range(1, 13)
] + [
    {"date": "2024-12-20", "merchant": "Vinmonopolet", "amount": 1200.0, "category": "alcohol"},
    {"date": "2024-06-20", "merchant": "Vinmonopolet", "amount": 400.0, "category": "alcohol"},
]

analysis = engine.predict(history, organization_type="association", timeframe="next_quarter")
for prediction in analysis.predictions:
    print(f"  {prediction.category:12} {prediction.predicted_amount:10.2f} NOK "
          f"({prediction.trend}, conf: {prediction.confidence:.2f})")
for rec in analysis.budget_recommendations:
    print(f"  {rec.category:18} {rec.recommended_amount:10.2f} NOK [{rec.risk_level}]")

print("\n" + "=" * 60)
print(engine.service_info())
