#!/usr/bin/env python3
"""
마인드풀니스 게이트: 실행 중인 서비스에 세션을 만들고(또는 기존 세션 지정)
phase 가 complete 가 될 때까지 상태를 폴링. 완료 시 exit 0.

직접 만든 세션은 카메라가 없으므로 폴링마다 얼굴 없는 프레임({"dt": interval})을
보냄 → 얼굴이 한 번도 안 보인 채 목표 시간이 지나면 서비스가 자리 비움으로 완료 처리.
기존 세션(--session)은 다른 클라이언트가 프레임을 보내므로 조회만 함.

사용법:
    python scripts/mindfulness_gate.py --base-url http://localhost:8000 --duration 10
    python scripts/mindfulness_gate.py --session <id> --timeout 120
"""
import argparse
import sys
import time

import requests

# 프레임 dt 상한 (FrameInput 검증과 동일)
MAX_FRAME_DT = 1.0


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Wait until a mindfulness session completes")
    ap.add_argument("--base-url", default="http://localhost:8000")
    ap.add_argument("--session", default=None, help="기존 세션 ID (없으면 새로 생성)")
    ap.add_argument("--duration", type=float, default=10.0, help="목표 시간 (새 세션 생성 시)")
    ap.add_argument("--policy", choices=["decay", "reset"], default="decay")
    ap.add_argument("--interval", type=float, default=0.5, help="폴링 간격 (초)")
    ap.add_argument("--timeout", type=float, default=0.0, help="0 이면 무제한")
    ap.add_argument("--api-key", default=None, help="X-Internal-Api-Key")
    return ap.parse_args(argv)


def create_session(http: requests.Session, base_url: str, duration: float, policy: str) -> str:
    res = http.post(
        f"{base_url}/experiments",
        json={"kind": "mindfulness", "options": {"target_duration": duration, "policy": policy}},
        timeout=10,
    )
    res.raise_for_status()
    return res.json()["id"]


def push_frame(http: requests.Session, base_url: str, session_id: str, dt: float) -> str:
    """얼굴 없는 프레임 1개 → 갱신된 phase"""
    res = http.post(
        f"{base_url}/experiments/{session_id}/frames",
        json={"dt": min(dt, MAX_FRAME_DT)},
        timeout=10,
    )
    res.raise_for_status()
    return res.json()["state"]["phase"]


def fetch_phase(http: requests.Session, base_url: str, session_id: str) -> str:
    res = http.get(f"{base_url}/experiments/{session_id}", timeout=10)
    res.raise_for_status()
    return res.json()["state"]["phase"]


def main(argv=None) -> int:
    args = parse_args(argv)
    base_url = args.base_url.rstrip("/")
    if args.interval <= 0:
        print("[gate] --interval must be > 0")
        return 2

    http = requests.Session()
    if args.api_key:
        http.headers["X-Internal-Api-Key"] = args.api_key

    try:
        owned = args.session is None
        session_id = create_session(http, base_url, args.duration, args.policy) if owned else args.session
        print(f"[gate] session={session_id}, waiting for completion...")

        started = time.monotonic()
        last = None
        while True:
            if owned:
                phase = push_frame(http, base_url, session_id, args.interval)
            else:
                phase = fetch_phase(http, base_url, session_id)
            if phase != last:
                print(f"[gate] phase={phase}")
                last = phase
            if phase == "complete":
                break
            if args.timeout and time.monotonic() - started > args.timeout:
                print(f"[gate] timeout after {args.timeout:.0f}s (phase={phase})")
                return 1
            time.sleep(args.interval)
    except requests.RequestException as e:
        print(f"[gate] request failed: {e}")
        return 1

    print("[gate] mindfulness complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
