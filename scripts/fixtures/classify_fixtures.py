#!/usr/bin/env python3
"""
fixtures/*.landmarks.json 을 전부 분류해서 CSV 로 저장
(각도 구간 경계값 재검증용: 부위별 상태, 포즈, 원시 각도)

사용법:
    python scripts/fixtures/classify_fixtures.py --out data/fixture_report.csv
"""
import argparse
from pathlib import Path

import pandas as pd

from playground.analyze.body_parts import classify_body_parts, get_pose_angles
from playground.analyze.yoga import calc_accuracy, pose_from_parts
from playground.config.settings import settings
from playground.utils.fixtures import fixture_path, list_fixtures, load_landmarks


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Classify landmark fixtures into a CSV table")
    ap.add_argument("--fixtures-dir", default=str(settings.FIXTURES_DIR))
    ap.add_argument("--out", default="data/fixture_report.csv")
    return ap.parse_args(argv)


def classify_row(name: str, landmarks) -> dict:
    parts = classify_body_parts(landmarks)
    angles = get_pose_angles(landmarks)
    pose = pose_from_parts(parts)
    row = {
        "fixture": name,
        "points": len(landmarks),
        "pose": pose.value if pose else None,
    }
    if parts is not None:
        row.update({f"part.{k}": v for k, v in parts.model_dump(mode="json").items()})
    if angles is not None:
        row.update({f"angle.{k}": round(v, 2) for k, v in angles.model_dump().items()})
    if pose is not None:
        row["accuracy"] = round(calc_accuracy(landmarks, pose) * 100, 1)
    return row


def build_report(fixtures_dir: Path) -> pd.DataFrame:
    rows = []
    for name in list_fixtures(fixtures_dir):
        try:
            landmarks = load_landmarks(fixture_path(name, base_dir=fixtures_dir))
            rows.append(classify_row(name, landmarks))
        except (OSError, ValueError, KeyError) as e:
            print(f"[fixtures] skip {name}: {e}")
    return pd.DataFrame(rows)


def main(argv=None):
    args = parse_args(argv)
    df = build_report(Path(args.fixtures_dir))
    if df.empty:
        print(f"[fixtures] no fixtures found in {args.fixtures_dir}")
        return

    out_csv = Path(args.out)
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_csv, index=False)

    unclassified = df["pose"].isna().sum()
    print(f"[fixtures] rows={len(df)} unclassified={unclassified}")
    print(f"[fixtures] saved csv: {out_csv}")


if __name__ == "__main__":
    main()
