"""테스트 데이터 및 테스트 더블"""
