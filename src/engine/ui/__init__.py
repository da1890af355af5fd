"""
どこで: `engine.ui` サブパッケージ。
何を: コントロール面（パラメータ GUI）を提供する。
"""
