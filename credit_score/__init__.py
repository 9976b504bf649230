# credit_score package
