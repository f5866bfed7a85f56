"""Season-keyed clan statistics storage with replicated backends"""
