#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import os
import socket
import ssl
import sys
import time
from datetime import datetime
from urllib.parse import urlparse

# 添加项目路径
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(current_dir)
sys.path.insert(0, project_root)

from clientapi.drivers.clientapi.driver import init_ClientApi
from clientapi.drivers.clientapi.errors import ClientApiError


def dns_lookup(host: str, timeout: float = 3.0):
    t0 = time.time()
    try:
        socket.setdefaulttimeout(timeout)
        infos = socket.getaddrinfo(host, 443, proto=socket.IPPROTO_TCP)
        ips = list({info[4][0] for info in infos})
        return {"ok": True, "ips": ips, "ms": int((time.time() - t0) * 1000)}
    except OSError as e:
        return {"ok": False, "error": str(e), "ms": int((time.time() - t0) * 1000)}


def tcp_connect(host: str, port: int, timeout: float = 3.0):
    t0 = time.time()
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return {"ok": True, "ms": int((time.time() - t0) * 1000)}
    except OSError as e:
        return {"ok": False, "error": str(e), "ms": int((time.time() - t0) * 1000)}


def tls_handshake(host: str, port: int, timeout: float = 5.0):
    t0 = time.time()
    ctx = ssl.create_default_context()
    try:
        with socket.create_connection((host, port), timeout=timeout) as sock:
            with ctx.wrap_socket(sock, server_hostname=host) as ssock:
                return {"ok": True, "version": ssock.version(), "ms": int((time.time() - t0) * 1000)}
    except OSError as e:
        return {"ok": False, "error": str(e), "ms": int((time.time() - t0) * 1000)}


def timed_call(name, fn, *args, **kwargs):
    t0 = time.time()
    try:
        result = fn(*args, **kwargs)
        return {"name": name, "ok": True, "ms": int((time.time() - t0) * 1000), "result": result}
    except ClientApiError as e:
        return {"name": name, "ok": False, "ms": int((time.time() - t0) * 1000), "error": str(e)}


def probe_driver(driver, symbol=None, signed=False):
    """Call the public endpoints (and balance when signed) once each."""
    calls = []
    symbols = timed_call("symbols", driver.symbols)
    calls.append({**symbols, "result": len(symbols.get("result") or [])})
    if symbol is None and symbols.get("result"):
        symbol = symbols["result"][0].name
    if symbol:
        depth = timed_call("depth", driver.depth, symbol)
        if depth["ok"]:
            d = depth["result"]
            depth["result"] = f"{d.symbol}: {len(d.bids)} bids / {len(d.asks)} asks"
        calls.append(depth)
        trades = timed_call("trades", driver.trades, symbol, count=10)
        calls.append({**trades, "result": len(trades.get("result") or [])})
    if signed:
        balance = timed_call("balance", driver.balance)
        if balance["ok"]:
            balance["result"] = [a.currency for a in balance["result"].accounts]
        calls.append(balance)
    return calls


def probe_network(base_url):
    parsed = urlparse(base_url)
    host = parsed.hostname or base_url
    port = parsed.port or (443 if parsed.scheme == "https" else 80)
    result = {"host": host, "port": port, "dns": dns_lookup(host), "tcp": tcp_connect(host, port)}
    if parsed.scheme == "https":
        result["tls"] = tls_handshake(host, port)

    issues = []
    if not result["dns"]["ok"]:
        issues.append("DNS failed")
    if result["dns"].get("ms", 0) > 1500:
        issues.append("DNS slow")
    if not result["tcp"]["ok"]:
        issues.append("TCP connect failed")
    if "tls" in result and not result["tls"]["ok"]:
        issues.append("TLS handshake failed")
    result["issues"] = issues
    return result


def main(argv=None):
    parser = argparse.ArgumentParser(description="ClientApi 网络连接与驱动测试")
    parser.add_argument("--base-url", default=os.getenv("CLIENTAPI_BASE_URL"),
                        help="覆盖 configs/clientapi.yaml 中的 base_url")
    parser.add_argument("--account-id", type=int, default=None,
                        help="账户ID (configs/account.yaml 顺序), 提供时额外测试 balance")
    parser.add_argument("--symbol", default=None, help="测试 depth/trades 使用的交易对")
    args = parser.parse_args(argv)

    print("🌐 ClientApi 网络连接与驱动测试")
    print("=" * 50)
    print(f"测试时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    driver = init_ClientApi(account_id=args.account_id, base_url=args.base_url)
    print(f"目标: {driver.rest.base_url}")

    net = probe_network(driver.rest.base_url)
    print("\n🔗 网络连接测试")
    print("-" * 30)
    for step in ("dns", "tcp", "tls"):
        if step in net:
            print(f"  {step.upper()}: {net[step]}")

    print("\n🚀 接口测试")
    print("-" * 30)
    calls = probe_driver(driver, symbol=args.symbol, signed=driver.signer is not None)
    for call in calls:
        status = "✅" if call["ok"] else "❌"
        detail = call.get("result") if call["ok"] else call.get("error")
        print(f"  {call['name']}: {status} ({call['ms']}ms) {detail}")

    ok = not net["issues"] and all(c["ok"] for c in calls)
    print("\n📋 结果: " + ("✅ 正常" if ok else "❌ 异常 - " + ", ".join(
        net["issues"] + [c["name"] for c in calls if not c["ok"]])))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
